"""MongoDB document models."""

from folio.models.nosql.portfolio import Portfolio, PortfolioContent, TemplateInfo

__all__ = ["Portfolio", "PortfolioContent", "TemplateInfo"]
