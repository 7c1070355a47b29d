"""Application services (pure domain logic, no I/O)."""

from file_uploader.application.services.name_generator import NameGenerator

__all__ = ["NameGenerator"]
