"""Templates resource."""

from __future__ import annotations

from renderdocs.models import ListTemplatesOptions, OutputFormat, Page, Template

from .base import BaseResource, build_options, path_segment


class TemplatesResource(BaseResource):
    """Read access to document templates."""

    async def get(self, template_id: str) -> Template:
        """Fetch a template, including the variables it expects."""
        body = await self._http.get(f"/api/v1/templates/{path_segment(template_id)}")
        return self._one(Template, body)

    async def list(
        self,
        *,
        type: OutputFormat | None = None,
        limit: int | None = None,
        page: int | None = None,
    ) -> Page[Template]:
        """List templates, optionally filtered by output type."""
        options = build_options(ListTemplatesOptions, type=type, limit=limit, page=page)
        body = await self._http.get(
            "/api/v1/templates",
            options.model_dump(by_alias=True, exclude_none=True),
        )
        return self._page(Template, body)

    async def list_pdf(self, *, limit: int | None = None, page: int | None = None) -> Page[Template]:
        return await self.list(type="pdf", limit=limit, page=page)

    async def list_excel(
        self, *, limit: int | None = None, page: int | None = None
    ) -> Page[Template]:
        return await self.list(type="excel", limit=limit, page=page)
