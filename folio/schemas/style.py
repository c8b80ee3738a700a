"""Style pipeline schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Customizations(BaseModel):
    """Theme document of a portfolio. Unknown sections are kept."""

    model_config = ConfigDict(extra="allow")

    colors: dict[str, Any] = Field(default_factory=dict)
    fonts: dict[str, Any] = Field(default_factory=dict)
    typography: dict[str, Any] = Field(default_factory=dict)
    spacing: dict[str, Any] = Field(default_factory=dict)


class ComposeRequest(BaseModel):
    """Editor state for one element.

    ``props`` is taken as-is; the composer ignores anything it cannot use.
    """

    props: dict[str, Any] = Field(default_factory=dict)
    customizations: Customizations = Field(default_factory=Customizations)
    preset: str | None = Field(None, max_length=50)


class ComposeResponse(BaseModel):
    styles: dict[str, Any]
    classes: list[str]


class ResolveResponse(BaseModel):
    property: str
    token: str
    value: Any
    known: bool
