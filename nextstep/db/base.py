"""SQLAlchemy declarative base with every model imported, for create_all."""
from nextstep.db.session import Base

# Import all models so the metadata knows every table
import nextstep.models  # noqa: F401

__all__ = ["Base"]
