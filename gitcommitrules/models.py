"""Validated value types for conventional commit messages.

Each value type normalizes and checks its input when it is constructed, so
holding an instance is proof that the text satisfies the rules. ``parse`` is
provided on every type as the named constructor for raw text.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .errors import (
    BodyEmpty,
    BodyLineTooLong,
    BreakingNoteEmpty,
    BreakingNoteMultiline,
    CommitTypeInvalid,
    ScopeEmpty,
    ScopeHasClosingParen,
    ScopeMultiline,
    SubjectTooLong,
    SummaryEmpty,
    SummaryEndsWithPeriod,
    SummaryMultiline,
)

SUBJECT_MAX_LENGTH = 50
BODY_LINE_MAX_LENGTH = 72
BREAKING_FOOTER_TOKEN = "BREAKING CHANGE:"


class CommitType(str, Enum):
    FIX = "fix"
    FEAT = "feat"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    BUILD = "build"
    CHORE = "chore"
    CI = "ci"
    REVERT = "revert"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def allowed_list(cls) -> str:
        """Space-joined type names in declaration order."""
        return " ".join(member.value for member in cls)

    @classmethod
    def parse(cls, raw: str) -> "CommitType":
        """Match trimmed text against the type vocabulary (case-sensitive)."""
        candidate = raw.strip()
        for member in cls:
            if member.value == candidate:
                return member
        raise CommitTypeInvalid(raw=candidate, allowed=cls.allowed_list())


def split_lines(text: str) -> List[str]:
    """Split on line feeds, dropping one trailing carriage return per line.

    A trailing line feed does not produce an empty final line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _is_multiline(text: str) -> bool:
    return "\n" in text or "\r" in text


@dataclass(frozen=True)
class CommitSummary:
    """Single-line summary with whitespace runs collapsed."""

    value: str

    def __post_init__(self):
        summary = self.value.strip()
        if not summary:
            raise SummaryEmpty()
        if _is_multiline(summary):
            raise SummaryMultiline()
        summary = " ".join(summary.split())
        if summary.endswith("."):
            raise SummaryEndsWithPeriod()
        object.__setattr__(self, "value", summary)

    @classmethod
    def parse(cls, raw: str) -> "CommitSummary":
        return cls(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CommitScope:
    value: str

    def __post_init__(self):
        scope = self.value.strip()
        if not scope:
            raise ScopeEmpty()
        if _is_multiline(scope):
            raise ScopeMultiline()
        if ")" in scope:
            raise ScopeHasClosingParen()
        object.__setattr__(self, "value", scope)

    @classmethod
    def parse(cls, raw: str) -> "CommitScope":
        return cls(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CommitBody:
    """Free-form body text; every non-empty line fits in 72 characters."""

    value: str

    def __post_init__(self):
        body = self.value.strip()
        if not body:
            raise BodyEmpty()
        for line in split_lines(body):
            if line and len(line) > BODY_LINE_MAX_LENGTH:
                raise BodyLineTooLong(len=len(line), line=line)
        object.__setattr__(self, "value", body)

    @classmethod
    def parse(cls, raw: str) -> "CommitBody":
        return cls(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BreakingNote:
    value: str

    def __post_init__(self):
        note = self.value.strip()
        if not note:
            raise BreakingNoteEmpty()
        if _is_multiline(note):
            raise BreakingNoteMultiline()
        object.__setattr__(self, "value", note)

    @classmethod
    def parse(cls, raw: str) -> "BreakingNote":
        return cls(raw)

    def __str__(self) -> str:
        return self.value


def check_subject_length(subject: str, summary: str) -> None:
    """Raise SubjectTooLong when ``subject`` exceeds the 50 character ceiling.

    The budget reported back is what is left for the summary once the
    type/scope/bang prefix is accounted for. The prefix is found by removing
    every occurrence of the summary text from the subject, so a summary that
    also appears inside the prefix skews the budget.
    """
    length = len(subject)
    if length <= SUBJECT_MAX_LENGTH:
        return
    prefix_without_summary = subject.replace(summary, "")
    budget = max(SUBJECT_MAX_LENGTH - len(prefix_without_summary), 0)
    raise SubjectTooLong(len=length, budget=budget, subject=subject)


@dataclass(frozen=True)
class CommitSubject:
    """Canonical ``type(scope)!: summary`` line assembled from validated parts.

    The bang is present exactly when a breaking note is given.
    """

    commit_type: CommitType
    summary: CommitSummary
    scope: Optional[CommitScope] = None
    breaking_note: Optional[BreakingNote] = None
    value: str = field(init=False)

    def __post_init__(self):
        bang = "!" if self.breaking_note is not None else ""
        if self.scope is not None:
            subject = f"{self.commit_type.value}({self.scope.value}){bang}: {self.summary.value}"
        else:
            subject = f"{self.commit_type.value}{bang}: {self.summary.value}"
        check_subject_length(subject, self.summary.value)
        object.__setattr__(self, "value", subject)

    @property
    def has_bang(self) -> bool:
        return self.breaking_note is not None

    def __str__(self) -> str:
        return self.value
