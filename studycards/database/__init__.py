"""DuckDB persistence for StudyCards."""

from .manager import DatabaseManager

__all__ = ["DatabaseManager"]
