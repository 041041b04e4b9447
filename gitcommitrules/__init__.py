"""Validation and composition of Conventional Commit messages."""

__version__ = "0.1.0"

from .commit_message import (
    CommitMessageGenerator,
    CommitMessageValidator,
    new_commit_message,
    validate_commit_message,
)
from .models import (
    BreakingNote,
    CommitBody,
    CommitScope,
    CommitSubject,
    CommitSummary,
    CommitType,
)
from .errors import ValidationError

__all__ = [
    "BreakingNote",
    "CommitBody",
    "CommitMessageGenerator",
    "CommitMessageValidator",
    "CommitScope",
    "CommitSubject",
    "CommitSummary",
    "CommitType",
    "ValidationError",
    "new_commit_message",
    "validate_commit_message",
]
