"""Observer pattern for validation outcomes."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .errors import ValidationError


def _subject_of(message: str) -> str:
    for line in message.splitlines():
        if line.strip() and not line.startswith("#"):
            return line.strip()
    return ""


class ValidationObserver(ABC):
    """Abstract base class for validation observers."""

    @abstractmethod
    def on_validation_completed(
        self, message: str, error: Optional[ValidationError]
    ) -> None:
        """Called after a message was validated; ``error`` is None on success."""
        pass


class ConsoleLogObserver(ValidationObserver):
    """Observer that reports validation results to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def on_validation_completed(
        self, message: str, error: Optional[ValidationError]
    ) -> None:
        if error is None:
            self.console.print(
                f"[green]Valid commit message: {escape(_subject_of(message))}[/green]"
            )
        else:
            self.console.print(f"[red]{escape(str(error))}[/red]")


class FileLogObserver(ValidationObserver):
    """Observer that logs validation results to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a") as f:
            f.write(f"{timestamp} - {message}\n")

    def on_validation_completed(
        self, message: str, error: Optional[ValidationError]
    ) -> None:
        subject = _subject_of(message)
        if error is None:
            self._log(f"Accepted: {subject}")
        else:
            reason = str(error).splitlines()[0]
            self._log(f"Rejected ({error.kind}): {subject} - {reason}")
