"""Portfolio schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from folio.models.nosql.portfolio import PortfolioContent, TemplateInfo
from folio.schemas.style import Customizations


class PortfolioCreate(BaseModel):
    """Schema for creating a portfolio, optionally from a gallery template."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    template: str | None = Field(None, max_length=100)
    content: PortfolioContent | None = None
    customizations: Customizations | None = None


class PortfolioUpdate(BaseModel):
    """Schema for updating a portfolio."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    is_published: bool | None = None
    content: PortfolioContent | None = None
    customizations: Customizations | None = None


class PortfolioResponse(BaseModel):
    """Schema for portfolio response."""

    id: str
    user_id: str
    title: str
    description: str | None = None
    is_published: bool
    content: PortfolioContent
    customizations: dict[str, Any]
    template_info: TemplateInfo | None = None
    created_at: datetime
    updated_at: datetime


class PortfolioListResponse(BaseModel):
    """Schema for paginated portfolio list."""

    items: list[PortfolioResponse]
    total: int
    page: int
    page_size: int
    pages: int


class ThemeResponse(BaseModel):
    """Theme variables of a portfolio and the ``:root`` rule they render to."""

    variables: dict[str, str]
    css: str
    classes: list[str]
    font_stacks: dict[str, str]


class ThemePresetRequest(BaseModel):
    """Apply one of the built-in presets."""

    kind: Literal["colors", "fonts", "typography", "reset"]
    name: str | None = Field(None, max_length=50)

    @model_validator(mode="after")
    def require_name(self) -> "ThemePresetRequest":
        """Every preset kind except reset picks a named entry."""
        if self.kind != "reset" and not self.name:
            raise ValueError(f"A {self.kind} preset needs a name")
        return self
