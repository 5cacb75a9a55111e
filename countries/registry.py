"""Country registry keyed by ISO 3166-1 numeric code."""

from dataclasses import dataclass

from core.errors import CountryNotFoundError
from countries.table import ISO_3166


@dataclass(frozen=True)
class Country:
    """One registry entry."""

    numeric: int
    alpha2: str
    alpha3: str
    name: str

    def to_dict(self):
        return {"code": self.numeric, "alpha2": self.alpha2, "alpha3": self.alpha3, "name": self.name}


UNKNOWN = Country(0, "", "", "Unknown")

_BY_NUMERIC = {numeric: Country(numeric, a2, a3, name) for numeric, a2, a3, name in ISO_3166}
_BY_ALPHA = {}
for _country in _BY_NUMERIC.values():
    _BY_ALPHA[_country.alpha2] = _country
    _BY_ALPHA[_country.alpha3] = _country


def get(code):
    """Registered country for a numeric code, or None."""
    if code == UNKNOWN.numeric:
        return UNKNOWN
    return _BY_NUMERIC.get(code)


def lookup(code):
    """Registered country for a numeric code, UNKNOWN otherwise."""
    return get(code) or UNKNOWN


def is_registered(code):
    return code in _BY_NUMERIC


def codes():
    return sorted(_BY_NUMERIC)


def all_countries():
    return [_BY_NUMERIC[code] for code in codes()]


def resolve(value):
    """Resolve an int, numeric string, alpha-2 or alpha-3 code.

    0 resolves to UNKNOWN. Anything else not in the registry raises
    CountryNotFoundError.
    """
    if isinstance(value, bool):
        raise CountryNotFoundError(value)
    if isinstance(value, int):
        country = get(value)
    elif isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            country = get(int(text))
        else:
            country = _BY_ALPHA.get(text.upper())
    else:
        country = None
    if country is None:
        raise CountryNotFoundError(value)
    return country
