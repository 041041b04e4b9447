"""Commit message composition."""
from typing import Optional

from ..models import (
    BREAKING_FOOTER_TOKEN,
    BreakingNote,
    CommitBody,
    CommitScope,
    CommitSubject,
    CommitSummary,
    CommitType,
)


def new_commit_message(
    subject: CommitSubject,
    body: Optional[CommitBody] = None,
    breaking_note: Optional[BreakingNote] = None,
) -> str:
    """Join subject, body and breaking footer into the final message text.

    No validation happens here; every part was validated when it was built.
    """
    message_parts = [subject.value]

    if body is not None:
        message_parts.append("")
        message_parts.append(body.value)

    if breaking_note is not None:
        message_parts.append("")
        message_parts.append(f"{BREAKING_FOOTER_TOKEN} {breaking_note.value}")

    return "\n".join(message_parts)


class CommitMessageGenerator:
    """Builds a complete commit message from raw field text.

    Each field goes through its value type, so the first rule violation is
    raised as the matching ``ValidationError``. Fields are checked in the
    order type, scope, summary, body, breaking note, then the assembled
    subject length.
    """

    def generate(
        self,
        commit_type: str,
        summary: str,
        scope: Optional[str] = None,
        body: Optional[str] = None,
        breaking_note: Optional[str] = None,
    ) -> str:
        parsed_type = CommitType.parse(commit_type)
        parsed_scope = CommitScope.parse(scope) if scope is not None else None
        parsed_summary = CommitSummary.parse(summary)
        parsed_body = CommitBody.parse(body) if body is not None else None
        parsed_note = BreakingNote.parse(breaking_note) if breaking_note is not None else None

        subject = CommitSubject(
            commit_type=parsed_type,
            summary=parsed_summary,
            scope=parsed_scope,
            breaking_note=parsed_note,
        )
        return new_commit_message(subject, parsed_body, parsed_note)
