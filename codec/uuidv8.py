"""
Country-tagged UUIDv8.

128-bit identifiers carrying a nanosecond creation timestamp, a 22-bit
country code and random filler. Sortable by creation time, no coordination
between issuers.
"""

import os
import time
import uuid

from codec.layout import (
    ID_SIZE,
    TIMESTAMP_MASK,
    TIMESTAMP_SLICE,
    VERSION,
    VERSION_BYTE,
    VARIANT_BYTE,
    as_bytes,
    pack_country,
    set_version,
    unpack_country,
)
from core.errors import RandomnessError, VersionMismatchError
from utils.timestamp import from_nanos


def encode(country_code, clock=time.time_ns, random_source=os.urandom):
    """Build a new identifier for ``country_code``.

    ``clock`` returns nanoseconds since the Unix epoch, ``random_source``
    returns n secure random bytes. Raises RandomnessError if the random
    source fails.
    """
    try:
        filler = random_source(ID_SIZE)
    except (OSError, NotImplementedError) as exc:
        raise RandomnessError("secure random source failed", cause=exc) from exc
    if not isinstance(filler, (bytes, bytearray)):
        raise RandomnessError("secure random source returned no bytes",
                              context={"got": type(filler).__name__})
    if len(filler) != ID_SIZE:
        raise RandomnessError("secure random source returned a short read",
                              context={"expected": ID_SIZE, "got": len(filler)})

    buf = bytearray(filler)
    # Version nibble lands on timestamp bits 12-15.
    buf[TIMESTAMP_SLICE] = (clock() & TIMESTAMP_MASK).to_bytes(8, "big")
    set_version(buf)
    pack_country(buf, country_code)
    return uuid.UUID(bytes=bytes(buf))


def decode(identifier):
    """Return the country code embedded in ``identifier``.

    Only the version nibble is checked; the variant bits are not.
    """
    raw = as_bytes(identifier)
    version = raw[VERSION_BYTE] >> 4
    if version != VERSION:
        raise VersionMismatchError(version)
    return unpack_country(raw)


def timestamp_ns(identifier):
    """Nanoseconds since the epoch stored in bytes 0-7."""
    return int.from_bytes(as_bytes(identifier)[TIMESTAMP_SLICE], "big")


def timestamp_of(identifier):
    """Creation time as an aware UTC datetime (microsecond resolution)."""
    return from_nanos(timestamp_ns(identifier))


def version_of(identifier):
    return as_bytes(identifier)[VERSION_BYTE] >> 4


def variant_of(identifier):
    return as_bytes(identifier)[VARIANT_BYTE] >> 6


def is_country_id(identifier):
    return version_of(identifier) == VERSION
