"""Identifier issue and inspect routes."""

import uuid
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

import countries
from codec import decode, encode, timestamp_ns, timestamp_of, variant_of, version_of
from core.errors import CountryNotFoundError, RandomnessError, VersionMismatchError
from internal.logging import get_logger
from service.auth import verify_basic_auth
from utils.timestamp import format_datetime

router = APIRouter(prefix="/api/v1/ids", tags=["ids"])

# These will be set by app.py
_issuer = None


class IssueRequest(BaseModel):
    country: Optional[Union[int, str]] = None
    count: int = Field(default=1, ge=1)


def init(issuer_config):
    """Initialize with issuer settings."""
    global _issuer
    _issuer = issuer_config


@router.post("", status_code=status.HTTP_201_CREATED)
async def issue(request: IssueRequest, username=Depends(verify_basic_auth)):
    """Issue one or more identifiers for a country (requires basic auth)."""
    log = get_logger()
    if request.count > _issuer.max_batch:
        raise HTTPException(
            status_code=422,
            detail=f"count exceeds max_batch ({_issuer.max_batch})",
        )

    value = _issuer.default_country if request.country is None else request.country
    try:
        country = countries.resolve(value)
    except CountryNotFoundError as exc:
        log.info("Issue rejected", error=exc, country=value)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"unknown country: {value}")

    try:
        ids = [encode(country.numeric) for _ in range(request.count)]
    except RandomnessError as exc:
        log.error("Entropy source failed", error=exc, error_id=exc.error_id)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="entropy unavailable")

    log.debug("Issued ids", user=username, country=country.numeric, count=len(ids))
    return {"ids": [str(identifier) for identifier in ids], "country": country.to_dict()}


@router.get("/{value}")
async def inspect(value: str):
    """Decode the country and creation time embedded in an identifier."""
    try:
        identifier = uuid.UUID(value)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="malformed UUID")

    try:
        code = decode(identifier)
    except VersionMismatchError as exc:
        raise HTTPException(
            status_code=422,
            detail={"msg": "not a country UUIDv8", "version": exc.version},
        )

    return {
        "id": str(identifier),
        "version": version_of(identifier),
        "variant": variant_of(identifier),
        "country_code": code,
        "country": countries.lookup(code).to_dict(),
        "timestamp": format_datetime(timestamp_of(identifier)),
        "timestamp_ns": timestamp_ns(identifier),
    }
