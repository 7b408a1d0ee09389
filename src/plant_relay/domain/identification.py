"""Models for uploads and identification results."""

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class UploadedImage:
    """Image bytes accepted from a client upload."""

    content: bytes
    content_type: str
    filename: str

    @property
    def size(self) -> int:
        return len(self.content)


class PlantNetImageUrls(BaseModel):
    """Sized URLs of a reference image."""

    o: str | None = None
    m: str | None = None
    s: str | None = None


class PlantNetImage(BaseModel):
    """Reference image attached to a match."""

    url: PlantNetImageUrls = Field(default_factory=PlantNetImageUrls)

    @field_validator("url", mode="before")
    @classmethod
    def url_none_as_empty(cls, value: object) -> object:
        return {} if value is None else value


class PlantNetSpecies(BaseModel):
    """Species block of a Pl@ntNet match."""

    model_config = ConfigDict(populate_by_name=True)

    scientific_name: str = Field(alias="scientificNameWithoutAuthor")
    common_names: list[str] = Field(default_factory=list, alias="commonNames")
    description: str | None = None

    @field_validator("common_names", mode="before")
    @classmethod
    def common_names_none_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class IdentificationCandidate(BaseModel):
    """One ranked match returned by the upstream service."""

    score: float
    species: PlantNetSpecies
    images: list[PlantNetImage] = Field(default_factory=list)

    @field_validator("images", mode="before")
    @classmethod
    def images_none_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class IdentificationResult(BaseModel):
    """Normalized record returned to the client."""

    name: str
    scientific_name: str
    description: str
    benefits: str
    warnings: str
    confidence: float
    image_url: str = ""


class ResultSource(StrEnum):
    """Where an identification result came from."""

    UPSTREAM = "upstream"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class IdentificationOutcome:
    """Identification result tagged with its provenance."""

    result: IdentificationResult
    source: ResultSource
    note: str | None = None


@dataclass(frozen=True)
class ProbeResult:
    """Upstream status and body from a connectivity probe."""

    status_code: int
    data: object
