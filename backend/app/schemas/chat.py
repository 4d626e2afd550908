from datetime import datetime

from pydantic import BaseModel


class ChatResponse(BaseModel):
    message: str
    country: str
    timestamp: datetime
