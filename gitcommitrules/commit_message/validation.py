"""Commit message validation using Chain of Responsibility pattern.

Each handler enforces one stage of the rules and either raises the matching
``ValidationError``, marks the message as accepted (which ends the chain
early), or passes the shared context on to the next handler.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from ..errors import (
    BreakingNoteEmpty,
    MessageBangWithoutBreakingFooter,
    MessageBreakingFooterMissingBang,
    MessageBreakingFooterNotLast,
    MessageMissingBlankLineAfterSubject,
    MessageSubjectInvalidFormat,
    MessageSubjectMissing,
)
from ..models import (
    BREAKING_FOOTER_TOKEN,
    BreakingNote,
    CommitBody,
    CommitScope,
    CommitSubject,
    CommitSummary,
    CommitType,
    check_subject_length,
    split_lines,
)

AUTOSQUASH_PREFIXES = ("fixup! ", "squash! ", "amend! ")


@dataclass
class MessageContext:
    """State shared by the handlers while one message is validated."""

    raw: str
    lines: List[str] = field(default_factory=list)
    subject: str = ""
    commit_type: Optional[CommitType] = None
    raw_scope: Optional[str] = None
    summary: Optional[CommitSummary] = None
    has_bang: bool = False
    content: List[str] = field(default_factory=list)
    body_lines: List[str] = field(default_factory=list)
    breaking_note: Optional[str] = None
    accepted: bool = False


class ValidationHandler(ABC):
    """Abstract base class for validation handlers."""

    def __init__(self, next_handler: Optional['ValidationHandler'] = None):
        self.next_handler = next_handler

    def handle(self, context: MessageContext) -> MessageContext:
        """Validate and pass to the next handler unless the chain is done."""
        self.validate(context)
        if context.accepted or not self.next_handler:
            return context
        return self.next_handler.handle(context)

    @abstractmethod
    def validate(self, context: MessageContext) -> None:
        """Check one rule, raising a ValidationError on violation."""
        pass


class CommentStripHandler(ValidationHandler):
    """Drops comment lines, then blank lines around what is left."""

    def validate(self, context: MessageContext) -> None:
        lines = [line for line in split_lines(context.raw) if not line.startswith('#')]
        while lines and not lines[0].strip():
            lines.pop(0)
        while lines and not lines[-1].strip():
            lines.pop()
        context.lines = lines


class SubjectPresenceHandler(ValidationHandler):
    def validate(self, context: MessageContext) -> None:
        if not context.lines:
            raise MessageSubjectMissing()
        context.subject = context.lines[0].strip()


class AutosquashHandler(ValidationHandler):
    """Accepts fixup!/squash!/amend! subjects without further checks."""

    def validate(self, context: MessageContext) -> None:
        subject = context.subject
        if not subject.startswith(AUTOSQUASH_PREFIXES):
            return
        rest = subject.split(' ', 1)[1].strip()
        if not rest:
            raise MessageSubjectInvalidFormat(subject=subject)
        context.accepted = True


class SubjectFormatHandler(ValidationHandler):
    """Parses ``type(scope)!: summary`` out of the subject line.

    The scope is only captured here; it is validated once the rest of the
    message has been checked.
    """

    def validate(self, context: MessageContext) -> None:
        subject = context.subject
        prefix, separator, summary_raw = subject.partition(': ')
        if not separator:
            raise MessageSubjectInvalidFormat(subject=subject)

        prefix = prefix.strip()
        if not prefix:
            raise MessageSubjectInvalidFormat(subject=subject)

        has_bang = prefix.endswith('!')
        if has_bang:
            prefix = prefix[:-1].rstrip()
            if not prefix:
                raise MessageSubjectInvalidFormat(subject=subject)

        raw_scope = None
        if prefix.endswith(')'):
            open_paren = prefix.find('(')
            if open_paren == -1:
                raise MessageSubjectInvalidFormat(subject=subject)
            raw_type = prefix[:open_paren].strip()
            raw_scope = prefix[open_paren + 1:-1]
            if not raw_type:
                raise MessageSubjectInvalidFormat(subject=subject)
            commit_type = CommitType.parse(raw_type)
        else:
            commit_type = CommitType.parse(prefix)

        context.commit_type = commit_type
        context.raw_scope = raw_scope
        context.summary = CommitSummary.parse(summary_raw)
        context.has_bang = has_bang


class SubjectLengthHandler(ValidationHandler):
    def validate(self, context: MessageContext) -> None:
        check_subject_length(context.subject, context.summary.value)


class BlankLineHandler(ValidationHandler):
    """Requires a blank line between the subject and anything after it."""

    def validate(self, context: MessageContext) -> None:
        rest = context.lines[1:]
        if not rest:
            _accept_without_footer(context)
            return

        if rest[0].strip():
            raise MessageMissingBlankLineAfterSubject()

        context.content = rest[1:]
        if not context.content:
            _accept_without_footer(context)


class BreakingFooterHandler(ValidationHandler):
    """Splits a trailing ``BREAKING CHANGE:`` footer off the body."""

    def validate(self, context: MessageContext) -> None:
        content = context.content
        footer_indices = [
            index for index, line in enumerate(content)
            if line.lstrip().startswith(BREAKING_FOOTER_TOKEN)
        ]

        if not footer_indices:
            context.body_lines = content
            return

        if len(footer_indices) != 1 or footer_indices[0] != len(content) - 1:
            raise MessageBreakingFooterNotLast()

        note_raw = content[-1].strip()[len(BREAKING_FOOTER_TOKEN):]
        if note_raw.startswith(' '):
            note_raw = note_raw[1:]
        note = note_raw.strip()
        if not note:
            raise BreakingNoteEmpty()

        if len(content) == 1:
            context.body_lines = []
        else:
            if content[-2].strip():
                raise MessageBreakingFooterNotLast()
            context.body_lines = content[:-2]
        context.breaking_note = note


class BangConsistencyHandler(ValidationHandler):
    """A subject bang and a breaking footer must appear together."""

    def validate(self, context: MessageContext) -> None:
        if context.breaking_note is not None:
            if not context.has_bang:
                raise MessageBreakingFooterMissingBang()
        elif context.has_bang:
            raise MessageBangWithoutBreakingFooter()


class BodyHandler(ValidationHandler):
    def validate(self, context: MessageContext) -> None:
        if any(line.strip() for line in context.body_lines):
            CommitBody.parse('\n'.join(context.body_lines))


class SubjectReconstructionHandler(ValidationHandler):
    """Rebuilds the subject from its parsed parts.

    This applies the scope rules and the assembled-subject length check,
    which the line-level parse does not cover on its own.
    """

    def validate(self, context: MessageContext) -> None:
        scope = CommitScope.parse(context.raw_scope) if context.raw_scope is not None else None
        note = BreakingNote.parse(context.breaking_note) if context.breaking_note is not None else None
        CommitSubject(
            commit_type=context.commit_type,
            summary=context.summary,
            scope=scope,
            breaking_note=note,
        )
        context.accepted = True


def _accept_without_footer(context: MessageContext) -> None:
    if context.has_bang:
        raise MessageBangWithoutBreakingFooter()
    context.accepted = True


def create_validation_chain() -> ValidationHandler:
    """Create the default validation chain."""
    reconstruction = SubjectReconstructionHandler()
    body = BodyHandler(reconstruction)
    bang = BangConsistencyHandler(body)
    footer = BreakingFooterHandler(bang)
    blank_line = BlankLineHandler(footer)
    subject_length = SubjectLengthHandler(blank_line)
    subject_format = SubjectFormatHandler(subject_length)
    autosquash = AutosquashHandler(subject_format)
    subject_presence = SubjectPresenceHandler(autosquash)
    comments = CommentStripHandler(subject_presence)

    return comments
