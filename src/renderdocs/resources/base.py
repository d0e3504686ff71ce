"""Shared plumbing for API resources."""

from __future__ import annotations

from typing import Any, TypeVar
from urllib.parse import quote

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from renderdocs.exceptions import TransportError, ValidationError
from renderdocs.http import HttpClient
from renderdocs.models import Page, PaginationMeta

M = TypeVar("M", bound=BaseModel)


def path_segment(value: str) -> str:
    """Escape an ID for use as a single URL path segment."""
    if not value:
        raise ValidationError("id", "must not be empty")
    return quote(value, safe="")


def build_options(model: type[M], **values: Any) -> M:
    """Validate caller arguments into a request model.

    Raises:
        ValidationError: Naming the first invalid field.
    """
    try:
        return model.model_validate(values)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or model.__name__
        raise ValidationError(field, error["msg"]) from e


def unwrap_data(body: Any) -> Any:
    """Unwrap the ``{"success": true, "data": ...}`` envelope."""
    if not isinstance(body, dict) or "data" not in body:
        raise TransportError("Response is missing the 'data' envelope")
    return body["data"]


class BaseResource:
    """Base class for resource wrappers around the HTTP client."""

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    def _one(self, model: type[M], body: Any) -> M:
        return model.model_validate(unwrap_data(body))

    def _page(self, model: type[M], body: Any) -> Page[M]:
        items = unwrap_data(body) or []
        meta = body.get("meta")
        return Page[model](  # type: ignore[valid-type]
            data=[model.model_validate(item) for item in items],
            meta=PaginationMeta.model_validate(meta) if meta else None,
        )
