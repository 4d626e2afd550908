import asyncio
import logging
import random
from typing import Optional

from app.core.config import settings

logger = logging.getLogger(__name__)

MOCK_RESPONSES = [
    "Thank you for your inquiry about {country}! As an expert business consultant for SKV Business "
    "Services, I'd be happy to help you with business setup, compliance, and regulations in {country}.",
    "I understand you're interested in business services in {country}. Our team specializes in company "
    "formation, tax compliance, and business licensing. What specific aspect of business setup would "
    "you like to know more about?",
    "Great question! In {country}, there are several business structures and compliance requirements "
    "to consider. I can help you understand the registration process, tax obligations, and regulatory "
    "requirements. What's your specific business need?",
    "As your AI business consultant for {country}, I can provide guidance on various business services "
    "including company incorporation, VAT registration, licensing, and compliance. How can I assist "
    "you today?",
]


def canned_reply(country_name: str, rng: Optional[random.Random] = None) -> str:
    template = (rng or random).choice(MOCK_RESPONSES)
    return template.format(country=country_name)


async def reply_without_llm(country_name: str) -> str:
    # Mimic model latency so the widget's typing indicator behaves the same
    base = settings.CHAT_MOCK_DELAY_SECONDS
    delay = base + random.random() * base * 2
    if delay > 0:
        await asyncio.sleep(delay)

    logger.debug(f"Canned chat reply for {country_name} after {delay:.2f}s")
    return canned_reply(country_name)
