"""Error taxonomy for commit message validation.

Every rule the validator enforces has its own exception class. Callers may
rely on the class (or its ``kind``) and on the payload attributes; ``str()``
renders a message suitable for showing to a person editing the commit.
"""
from typing import Tuple


class ValidationError(Exception):
    """Base class for all commit message rule violations."""

    message = "Invalid commit message"
    fields: Tuple[str, ...] = ()

    def __init__(self, **payload):
        unknown = set(payload) - set(self.fields)
        missing = set(self.fields) - set(payload)
        if unknown or missing:
            raise TypeError(
                f"{type(self).__name__} expects fields {self.fields}, got {tuple(payload)}"
            )
        for name, value in payload.items():
            setattr(self, name, value)
        super().__init__(self.message.format(**payload))

    @property
    def kind(self) -> str:
        return type(self).__name__

    @property
    def payload(self) -> dict:
        """The rendering context carried by this error."""
        return {name: getattr(self, name) for name in self.fields}

    def __eq__(self, other):
        return type(self) is type(other) and self.payload == other.payload

    def __hash__(self):
        return hash((self.kind, tuple(self.payload.items())))

    def __repr__(self):
        args = ", ".join(f"{k}={v!r}" for k, v in self.payload.items())
        return f"{self.kind}({args})"


class CommitTypeInvalid(ValidationError):
    message = "Commit type must be one of {allowed} - got '{raw}'"
    fields = ("raw", "allowed")


class SummaryEmpty(ValidationError):
    message = "Summary is required"


class SummaryMultiline(ValidationError):
    message = "Summary must be a single line"


class SummaryEndsWithPeriod(ValidationError):
    message = "Summary should not end with a period"


class ScopeEmpty(ValidationError):
    message = "Scope cannot be empty when explicitly provided"


class ScopeMultiline(ValidationError):
    message = "Scope must be a single line"


class ScopeHasClosingParen(ValidationError):
    message = "Scope must not contain a closing parenthesis"


class BodyEmpty(ValidationError):
    message = "Body cannot be empty when explicitly provided"


class BodyLineTooLong(ValidationError):
    message = "Body line too long ({len} chars). Max 72 characters per line.\nLine: {line}"
    fields = ("len", "line")


class BreakingNoteEmpty(ValidationError):
    message = "Breaking note cannot be empty"


class BreakingNoteMultiline(ValidationError):
    message = "Breaking note must be a single line"


class SubjectTooLong(ValidationError):
    message = (
        "Subject too long ({len} > 50).\n"
        "Given current type/scope/bang, you have ~{budget} chars for --summary.\n"
        "Subject: {subject}"
    )
    fields = ("len", "budget", "subject")


class MessageSubjectMissing(ValidationError):
    message = "Commit message subject line is required"


class MessageSubjectInvalidFormat(ValidationError):
    message = (
        "Commit message subject must be formatted like 'type(scope)!: summary' "
        "or 'type: summary' - got '{subject}'"
    )
    fields = ("subject",)


class MessageMissingBlankLineAfterSubject(ValidationError):
    message = "When a commit message has body/footers, it must include a blank line after the subject"


class MessageBreakingFooterNotLast(ValidationError):
    message = "BREAKING CHANGE footer must be the final non-comment line"


class MessageBreakingFooterMissingBang(ValidationError):
    message = "BREAKING CHANGE footer requires '!' in the subject"


class MessageBangWithoutBreakingFooter(ValidationError):
    message = "Subject uses '!' but no BREAKING CHANGE footer was found"
