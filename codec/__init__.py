from codec.uuidv8 import (
    encode,
    decode,
    timestamp_of,
    timestamp_ns,
    version_of,
    variant_of,
    is_country_id,
)
from codec.layout import as_bytes, MAX_COUNTRY_CODE

__all__ = [
    "encode",
    "decode",
    "timestamp_of",
    "timestamp_ns",
    "version_of",
    "variant_of",
    "is_country_id",
    "as_bytes",
    "MAX_COUNTRY_CODE",
]
