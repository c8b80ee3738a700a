"""SQLAlchemy models package."""

from folio.models.sql.user import User

__all__ = ["User"]
