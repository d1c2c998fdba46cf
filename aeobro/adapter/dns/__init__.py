"""DNS adapter."""

from .resolver import MockTxtResolver, RealTxtResolver

__all__ = ["MockTxtResolver", "RealTxtResolver"]
