"""Met collection API response schemas and query models.

This module defines Pydantic models for raw Met API responses. Field
aliases match the API's camelCase names; unknown fields are ignored so new
upstream fields never break decoding.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import DEPARTMENT_ID_SEPARATOR


class ObjectIDsResponse(BaseModel):
    """Response of ``/objects``, ``/search`` and ``/objects/{id}/related``."""

    total: int = Field(..., ge=0)
    object_ids: list[int] = Field(default_factory=list, alias="objectIDs")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("object_ids", mode="before")
    @classmethod
    def null_means_empty(cls, v: Any) -> Any:
        """The API sends ``objectIDs: null`` when nothing matches."""
        return [] if v is None else v


class Department(BaseModel):
    """One curatorial department."""

    department_id: int = Field(..., alias="departmentId")
    display_name: str = Field(..., alias="displayName")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class DepartmentsResponse(BaseModel):
    departments: list[Department]


class AutocompleteResponse(BaseModel):
    terms: list[str] = Field(default_factory=list)


class MetTag(BaseModel):
    term: str

    model_config = ConfigDict(frozen=True)


class MetObject(BaseModel):
    """One collection record (subset of the fields the API returns)."""

    object_id: int = Field(..., alias="objectID")
    is_highlight: bool | None = Field(None, alias="isHighlight")
    accession_number: str | None = Field(None, alias="accessionNumber")
    accession_year: str | None = Field(None, alias="accessionYear")
    primary_image: str | None = Field(None, alias="primaryImage")
    primary_image_small: str | None = Field(None, alias="primaryImageSmall")
    department: str | None = None
    object_name: str | None = Field(None, alias="objectName")
    title: str | None = None
    culture: str | None = None
    period: str | None = None
    dynasty: str | None = None
    reign: str | None = None
    portfolio: str | None = None
    artist_display_name: str | None = Field(None, alias="artistDisplayName")
    artist_display_bio: str | None = Field(None, alias="artistDisplayBio")
    object_date: str | None = Field(None, alias="objectDate")
    medium: str | None = None
    dimensions: str | None = None
    credit_line: str | None = Field(None, alias="creditLine")
    geography_type: str | None = Field(None, alias="geographyType")
    city: str | None = None
    state: str | None = None
    county: str | None = None
    country: str | None = None
    classification: str | None = None
    object_url: str | None = Field(None, alias="objectURL")
    tags: list[MetTag] | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class ObjectQuery(BaseModel):
    """Filters for the ``/objects`` listing.

    Attributes:
        department_ids: Restrict to these departments
        has_images: Restrict to records with (or without) images
        search_query: Free-text filter
    """

    department_ids: list[int] | None = None
    has_images: bool | None = None
    search_query: str | None = None

    model_config = ConfigDict(frozen=True)

    def to_params(self) -> dict[str, str]:
        """Build query parameters; unset filters are omitted."""
        params: dict[str, str] = {}
        if self.department_ids:
            params["departmentIds"] = DEPARTMENT_ID_SEPARATOR.join(
                str(department_id) for department_id in self.department_ids
            )
        if self.has_images is not None:
            params["hasImages"] = "true" if self.has_images else "false"
        if self.search_query:
            params["q"] = self.search_query
        return params
