"""Domain layer: errors and schemas."""

from .errors import ErrorCodes, SnippetError
from .schemas import (
    DirectoryRegistration,
    LoadOutcome,
    LoadSummary,
    Snippet,
    SnippetSource,
    SnippetSubmission,
)

__all__ = [
    "SnippetError",
    "ErrorCodes",
    "Snippet",
    "SnippetSource",
    "SnippetSubmission",
    "DirectoryRegistration",
    "LoadOutcome",
    "LoadSummary",
]
