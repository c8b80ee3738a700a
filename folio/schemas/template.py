"""Template gallery schemas."""

from typing import Any

from pydantic import BaseModel


class TemplateResponse(BaseModel):
    id: str
    slug: str
    name: str
    description: str | None = None
    category: str
    rating: float
    price: float = 0
    is_free: bool = True
    created_at: str
    features: dict[str, bool]
    customizations: dict[str, Any]
    sections: list[dict[str, Any]]


class TemplateCategory(BaseModel):
    id: str
    name: str
