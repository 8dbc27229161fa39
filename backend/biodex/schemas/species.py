"""
Biodex Backend — Species Schemas
==================================

What:  Pydantic models for species records and the species edit form.
Why:   One set of field rules shared by the PATCH endpoint and the
       client-side RecordEditCard, so a draft the card accepts is exactly
       a body the API accepts.

Field rules (SpeciesForm):
    scientific_name   required, trimmed, at least one character
    common_name       blank → None, else trimmed
    kingdom           one of Kingdom
    total_population  None or an integer ≥ 1
    image             blank → None, else trimmed and an absolute URL
    description       blank → None, else trimmed

Every field is required as a key. "Absent" is None, never a missing key, so
a patch always carries all six values.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Optional

from pydantic import (
    AnyUrl,
    BaseModel,
    Field,
    StrictInt,
    TypeAdapter,
    ValidationError as PydanticValidationError,
    field_validator,
)

EDITABLE_FIELDS = (
    "scientific_name",
    "common_name",
    "kingdom",
    "total_population",
    "image",
    "description",
)


class Kingdom(str, Enum):
    ANIMALIA = "Animalia"
    PLANTAE = "Plantae"
    FUNGI = "Fungi"
    PROTISTA = "Protista"
    ARCHAEA = "Archaea"
    BACTERIA = "Bacteria"


_url_adapter = TypeAdapter(AnyUrl)


def blank_to_none(value: Any) -> Any:
    """Empty or whitespace-only text becomes None; other text is trimmed."""
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class SpeciesForm(BaseModel):
    """
    What:  The six editable species fields, validated and normalized.
    Who:   Request body of PATCH /api/species/{id}; draft validator of RecordEditCard.

    Normalization is idempotent: validating an already-normalized form
    yields the same values.
    """

    model_config = {"use_enum_values": True, "extra": "forbid"}

    scientific_name: str = Field(min_length=1, description="Scientific (binomial) name")
    common_name: Optional[str] = Field(description="Common name, e.g. Guinea pig")
    kingdom: Kingdom = Field(description="Taxonomic kingdom")
    total_population: Optional[Annotated[StrictInt, Field(ge=1)]] = Field(
        description="Estimated population"
    )
    image: Optional[str] = Field(description="Absolute URL of an image")
    description: Optional[str] = Field(description="Free-text description")

    @field_validator("scientific_name", mode="before")
    @classmethod
    def trim_scientific_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("common_name", "image", "description", mode="before")
    @classmethod
    def normalize_optional_text(cls, v: Any) -> Any:
        return blank_to_none(v)

    @field_validator("image")
    @classmethod
    def validate_image_url(cls, v: Optional[str]) -> Optional[str]:
        """Checks the URL is well-formed but keeps the trimmed text as typed."""
        if v is None:
            return v
        try:
            _url_adapter.validate_python(v)
        except PydanticValidationError as exc:
            raise ValueError("Invalid url") from exc
        return v

    def to_patch(self) -> Dict[str, Any]:
        """The full six-field patch sent to the store."""
        return self.model_dump()


class SpeciesRecord(BaseModel):
    """
    What:  A committed species row as the API returns it.
    Who:   Returned by GET/PATCH /api/species; held by RecordEditCard as its record.
    """

    id: int = Field(description="Immutable species identifier")
    scientific_name: str
    common_name: Optional[str] = None
    kingdom: str
    total_population: Optional[int] = None
    image: Optional[str] = None
    description: Optional[str] = None
    author: str = Field(description="Identifier of the owner")

    model_config = {"from_attributes": True}

    def editable_values(self) -> Dict[str, Any]:
        """The six form fields, as a fresh dict a draft can be built from."""
        return {name: getattr(self, name) for name in EDITABLE_FIELDS}


class SpeciesListResponse(BaseModel):
    """Wrapper for GET /api/species, newest species first."""

    species: List[SpeciesRecord] = Field(description="Species, ordered by id descending")
    total_count: int = Field(description="Number of species returned")
