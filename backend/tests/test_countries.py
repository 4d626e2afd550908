"""Tests for the chat widget country table"""

import pytest

from app.core.config import settings
from app.services.countries import all_countries, country_from_subdomain, get_country


@pytest.mark.parametrize("code,expected", [
    ("IN", "IN"),
    ("hu", "HU"),
    (" gb ", "GB"),
    ("FR", "AE"),
    ("", "AE"),
    (None, "AE"),
])
def test_get_country_falls_back_to_default(code, expected):
    assert get_country(code).code == expected


@pytest.mark.parametrize("hostname,expected", [
    ("in.skvchatgb.com", "IN"),
    ("hu.skvchatgb.com:3000", "HU"),
    ("GB.skvchatgb.com", "GB"),
    ("www.skvchatgb.com", "AE"),
    ("localhost", "AE"),
    ("", "AE"),
])
def test_country_from_subdomain(hostname, expected):
    assert country_from_subdomain(hostname) == expected


def test_all_countries_in_display_order():
    assert [c.code for c in all_countries()] == ["AE", "IN", "HU", "GB"]


def test_every_country_has_persona_and_contact():
    for country in all_countries():
        assert country.system.startswith("You are an expert business consultant for SKV Business Services")
        assert country.contact.email.endswith("@skvchatgb.com")
        assert country.model == settings.GROQ_MODEL
