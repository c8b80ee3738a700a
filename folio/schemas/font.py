"""Font schemas."""

from pydantic import BaseModel, Field


class FontResponse(BaseModel):
    """A catalog font family."""

    name: str
    weights: list[int]
    variable: bool
    category: str | None = None
    stack: str
    is_loaded: bool = False


class FontDetailResponse(FontResponse):
    stylesheet_url: str


class FontLoadRequest(BaseModel):
    families: list[str] = Field(..., min_length=1, max_length=20)
    weights: list[int] = Field(default_factory=lambda: [400], max_length=9)


class FontLoadResponse(BaseModel):
    loaded: list[str]
    failed: list[str]
