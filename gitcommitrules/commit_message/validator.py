"""Commit message validation."""
from typing import List, Optional, Tuple

from ..errors import ValidationError
from ..observers import ValidationObserver
from .validation import create_validation_chain, MessageContext


def validate_commit_message(raw_message: str) -> None:
    """Validate a full commit message.

    Returns None when the message is acceptable and raises the first
    ValidationError encountered otherwise.
    """
    create_validation_chain().handle(MessageContext(raw=raw_message))


class CommitMessageValidator:
    """Validates commit messages against conventional commit standards."""

    def __init__(self, observers: Optional[List[ValidationObserver]] = None):
        self.validation_chain = create_validation_chain()
        self.observers: List[ValidationObserver] = list(observers or [])

    def add_observer(self, observer: ValidationObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: ValidationObserver) -> None:
        self.observers.remove(observer)

    def check(self, message: str) -> Optional[ValidationError]:
        """Return the first rule violation in ``message``, or None."""
        try:
            self.validation_chain.handle(MessageContext(raw=message))
        except ValidationError as e:
            error = e
        else:
            error = None

        for observer in self.observers:
            observer.on_validation_completed(message, error)
        return error

    def validate(self, message: str) -> Tuple[bool, str]:
        """Validate a commit message against standards."""
        error = self.check(message)
        if error is not None:
            return False, str(error)
        return True, "Valid commit message"
