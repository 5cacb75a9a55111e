from countries.registry import (
    Country,
    UNKNOWN,
    get,
    lookup,
    resolve,
    codes,
    all_countries,
    is_registered,
)

__all__ = [
    "Country",
    "UNKNOWN",
    "get",
    "lookup",
    "resolve",
    "codes",
    "all_countries",
    "is_registered",
]
