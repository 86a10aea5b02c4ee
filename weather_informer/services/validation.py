"""
Search input validation.

Classifies free-text input as a US zip code, a US city (optionally with a
2-letter state) or invalid, and formats valid input for OpenWeatherMap.
"""
import re
from typing import Literal

from weather_informer.schemas.search import CityQuery, InvalidQuery, ValidationResult, ZipQuery

# Exactly 5 ASCII digits
ZIP_RE = re.compile(r"[0-9]{5}")

# Letters, spaces, periods, hyphens, apostrophes; optional ", XX" state suffix
CITY_RE = re.compile(r"[a-zA-Z][a-zA-Z\s.\-']{0,98}(,\s?[a-zA-Z]{2})?")

CITY_STATE_RE = re.compile(r"(.+),\s*([a-zA-Z]{2})")

COUNTRY_SUFFIX = "US"


def classify(text: str) -> ValidationResult:
    """
    Classify raw search input.

    Never raises: anything that is neither a zip code nor a city name
    comes back as `InvalidQuery`, and callers decide whether to stop
    before the network call.

    Examples:
        classify("90210")       -> ZipQuery(sanitized="90210")
        classify("Austin, TX")  -> CityQuery(sanitized="Austin, TX")
        classify("   ")         -> InvalidQuery(sanitized="")
    """
    sanitized = text.strip()

    if not sanitized:
        return InvalidQuery(sanitized="")

    if ZIP_RE.fullmatch(sanitized):
        return ZipQuery(sanitized=sanitized)

    if CITY_RE.fullmatch(sanitized):
        return CityQuery(sanitized=sanitized)

    return InvalidQuery(sanitized=sanitized)


def format_for_provider(sanitized: str, kind: Literal["zip", "city"]) -> str:
    """
    Build the OpenWeatherMap query for already-classified input.

    Zip codes and bare city names get ",US" appended. A trailing state
    ("Austin, TX" or "Austin,TX") is normalized to "Austin,TX,US".
    No re-validation happens here.
    """
    if kind == "zip":
        return f"{sanitized},{COUNTRY_SUFFIX}"

    match = CITY_STATE_RE.fullmatch(sanitized)
    if match:
        name, state = match.groups()
        return f"{name.strip()},{state},{COUNTRY_SUFFIX}"

    return f"{sanitized},{COUNTRY_SUFFIX}"
