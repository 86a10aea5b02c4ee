from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _QueryBase(_CamelModel):
    model_config = ConfigDict(frozen=True)

    sanitized: str = Field(..., description="Input with surrounding whitespace removed")


class ZipQuery(_QueryBase):
    """A 5-digit US zip code."""

    kind: Literal["zip"] = "zip"
    is_valid: Literal[True] = True


class CityQuery(_QueryBase):
    """A US city name, optionally followed by a 2-letter state abbreviation."""

    kind: Literal["city"] = "city"
    is_valid: Literal[True] = True


class InvalidQuery(_QueryBase):
    kind: Literal["invalid"] = "invalid"
    is_valid: Literal[False] = False


ValidationResult = Annotated[
    Union[ZipQuery, CityQuery, InvalidQuery],
    Field(discriminator="kind"),
]


class ValidationResponse(_CamelModel):
    """
    Response payload for `GET /validate`.
    """

    result: ValidationResult
    provider_query: Optional[str] = Field(
        default=None,
        description="Query string sent to the provider, when the input is valid.",
        examples=["Austin,TX,US"],
    )


class RecentSearchesResponse(_CamelModel):
    """
    Response payload listing recent searches, most recent first.
    """

    items: List[str] = Field(default_factory=list, examples=[["Austin, TX", "90210"]])
