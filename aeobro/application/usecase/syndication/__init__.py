"""Syndication use cases."""

from .check_syndication import (
    CheckSyndicationRequest,
    CheckSyndicationResponse,
    CheckSyndicationUseCase,
)

__all__ = [
    "CheckSyndicationRequest",
    "CheckSyndicationResponse",
    "CheckSyndicationUseCase",
]
