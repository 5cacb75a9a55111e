"""Country registry routes."""

from fastapi import APIRouter, HTTPException, status

import countries
from core.errors import CountryNotFoundError

router = APIRouter(prefix="/api/v1/countries", tags=["countries"])


@router.get("")
async def list_countries():
    return [country.to_dict() for country in countries.all_countries()]


@router.get("/{value}")
async def get_country(value: str):
    """Look up by numeric, alpha-2 or alpha-3 code."""
    try:
        return countries.resolve(value).to_dict()
    except CountryNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"unknown country: {value}")
