"""Portfolio document model for MongoDB."""

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class PortfolioContent(BaseModel):
    """Editor content: ordered sections plus page metadata."""

    sections: list[dict[str, Any]] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class TemplateInfo(BaseModel):
    """Template the portfolio was created from."""

    name: str | None = None
    slug: str | None = None
    category: str | None = None


class Portfolio(BaseModel):
    """Portfolio document stored in the ``portfolios`` collection."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()), alias="_id")
    user_id: str
    title: str
    description: str | None = None
    is_published: bool = False
    content: PortfolioContent = Field(default_factory=PortfolioContent)
    customizations: dict[str, Any] = Field(default_factory=dict)
    template_info: TemplateInfo | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def to_mongo(self) -> dict[str, Any]:
        """Convert to MongoDB document format."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_mongo(cls, data: dict[str, Any]) -> "Portfolio":
        """Create from MongoDB document."""
        data = dict(data)
        if data.get("_id") is not None:
            data["_id"] = str(data["_id"])
        return cls(**data)
