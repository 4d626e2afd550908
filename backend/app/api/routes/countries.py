"""Supported countries for the widget's country switcher. Read-only."""
from fastapi import APIRouter, Query

from app.services.countries import Country, all_countries, country_from_subdomain, get_country

router = APIRouter()

# Assistant prompt and model are server-side details
_PRIVATE_FIELDS = {"system", "model"}


def _public(country: Country) -> dict:
    return country.model_dump(exclude=_PRIVATE_FIELDS)


@router.get("", response_model=list)
def list_countries():
    return [_public(c) for c in all_countries()]


@router.get("/resolve")
def resolve_country(host: str = Query(..., description="Request hostname, e.g. in.skvchatgb.com")):
    """Pick the country from the site's subdomain."""
    return _public(get_country(country_from_subdomain(host)))


@router.get("/{code}")
def read_country(code: str):
    """Single country; unknown codes get the default country."""
    return _public(get_country(code))
