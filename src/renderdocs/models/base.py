"""Base models and shared types for the RenderDocs API."""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Output formats supported by the rendering service
OutputFormat = Literal["pdf", "excel"]


class ApiModel(BaseModel):
    """Base for all wire models.

    Fields are snake_case in Python and camelCase on the wire. Unknown
    fields sent by the service are kept rather than rejected so that
    newer API versions do not break older clients.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON body expected by the API."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PaginationMeta(ApiModel):
    """Pagination details returned alongside list responses."""

    total: int = Field(ge=0, description="Total number of matching items")
    page: int = Field(ge=1, description="Current page number")
    limit: int = Field(ge=0, description="Items per page")
    total_pages: int = Field(ge=0, description="Number of pages available")


class Page(BaseModel, Generic[T]):
    """One page of a list endpoint.

    Attributes:
        data: Items on this page.
        meta: Pagination details, if the service returned them.
    """

    data: list[T] = Field(default_factory=list)
    meta: PaginationMeta | None = None


class User(ApiModel):
    """The user that owns the API key."""

    id: str
    email: str
    name: str | None = None
    team_id: str | None = None
    team_name: str | None = None
    workspace_id: str | None = None
    workspace_name: str | None = None
