"""SQLAlchemy ORM models. Importing this package registers them on Base.metadata."""

from app.infrastructure.persistence.models.user import User

__all__ = ["User"]
