"""Commit message composition and validation package."""

from .generator import CommitMessageGenerator, new_commit_message
from .validation import ValidationHandler, create_validation_chain
from .validator import CommitMessageValidator, validate_commit_message

__all__ = [
    'CommitMessageGenerator',
    'new_commit_message',
    'ValidationHandler',
    'create_validation_chain',
    'CommitMessageValidator',
    'validate_commit_message',
]
