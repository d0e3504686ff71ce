"""Template models."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from .base import ApiModel, OutputFormat


class TemplateVariable(ApiModel):
    """A variable a template expects when rendering."""

    name: str
    type: str
    required: bool = False
    default_value: Any = None


class Template(ApiModel):
    """A document template stored by the service."""

    id: str
    name: str
    type: OutputFormat
    description: str | None = None
    variables: list[TemplateVariable] = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None


class ListTemplatesOptions(ApiModel):
    """Filters for listing templates."""

    type: OutputFormat | None = None
    limit: int | None = Field(default=None, ge=1)
    page: int | None = Field(default=None, ge=1)
