"""
Field layout of the country-tagged UUIDv8.

    bytes 0-7   unix_ts_ns, big-endian (byte 6 top nibble overlaid by version)
    byte 6      version (top nibble) = 8
    byte 8      variant (top 2 bits) = 10b, country_code[21:16] (low 6 bits)
    bytes 9-10  country_code[15:0]
    bytes 11-15 random filler
"""

import uuid

ID_SIZE = 16

TIMESTAMP_SLICE = slice(0, 8)
TIMESTAMP_MASK = 0xFFFF_FFFF_FFFF_FFFF

VERSION_BYTE = 6
VERSION = 0x8

VARIANT_BYTE = 8
VARIANT = 0b10

COUNTRY_BITS = 22
MAX_COUNTRY_CODE = (1 << COUNTRY_BITS) - 1
COUNTRY_HIGH_MASK = 0x3F


def as_bytes(identifier):
    """Return the 16 raw bytes of a UUID or 16-byte buffer."""
    if isinstance(identifier, uuid.UUID):
        return identifier.bytes
    if isinstance(identifier, (bytes, bytearray, memoryview)):
        raw = bytes(identifier)
        if len(raw) != ID_SIZE:
            raise ValueError(f"identifier must be {ID_SIZE} bytes, got {len(raw)}")
        return raw
    raise ValueError(f"unsupported identifier type: {type(identifier).__name__}")


def set_version(buf):
    buf[VERSION_BYTE] = (buf[VERSION_BYTE] & 0x0F) | (VERSION << 4)


def pack_country(buf, country_code):
    """Write the variant bits and the masked 22-bit country code into bytes 8-10."""
    code = country_code & MAX_COUNTRY_CODE
    buf[VARIANT_BYTE] = (VARIANT << 6) | ((code >> 16) & COUNTRY_HIGH_MASK)
    buf[9] = (code >> 8) & 0xFF
    buf[10] = code & 0xFF


def unpack_country(raw):
    return ((raw[VARIANT_BYTE] & COUNTRY_HIGH_MASK) << 16) | (raw[9] << 8) | raw[10]
