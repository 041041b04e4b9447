"""Tests for whole-message validation."""
import pytest

from gitcommitrules.commit_message import (
    CommitMessageGenerator,
    CommitMessageValidator,
    new_commit_message,
    validate_commit_message,
)
from gitcommitrules.errors import (
    BodyLineTooLong,
    BreakingNoteEmpty,
    CommitTypeInvalid,
    MessageBangWithoutBreakingFooter,
    MessageBreakingFooterMissingBang,
    MessageBreakingFooterNotLast,
    MessageMissingBlankLineAfterSubject,
    MessageSubjectInvalidFormat,
    MessageSubjectMissing,
    ScopeEmpty,
    ScopeHasClosingParen,
    SubjectTooLong,
    SummaryEndsWithPeriod,
)
from gitcommitrules.models import (
    BreakingNote,
    CommitBody,
    CommitScope,
    CommitSubject,
    CommitSummary,
    CommitType,
)
from gitcommitrules.observers import ValidationObserver


@pytest.mark.parametrize("message", [
    "fix: Handle empty input\n",
    "feat!: Change API\n\nBREAKING CHANGE: Old thing removed\n",
    "fixup! feat: Add feature\n",
    "squash! anything goes\nno blank line needed\n",
    "feat(api): Add endpoint\n\nExplain the endpoint.\n\nAnd more detail.\n",
    "feat(api)!: Drop v1\n\nWhy we drop it.\n\nBREAKING CHANGE: v1 is gone\n",
    "docs: Update readme\n\n\n",
    "# Please enter the commit message\n\nchore: Bump deps\n\n# On branch main\n",
    "feat( api ): Add endpoint\n",
    "perf: Speed up parse\r\n\r\nBody line\r\n",
    "ci: Cache pip\n\n" + "a" * 72 + "\n",
    "build!: Switch backend\n\n  BREAKING CHANGE: setup.py removed\n",
])
def test_valid_messages(message):
    assert validate_commit_message(message) is None


def test_missing_blank_line():
    with pytest.raises(MessageMissingBlankLineAfterSubject):
        validate_commit_message("fix: Handle empty input\nBody\n")


def test_breaking_footer_requires_bang():
    with pytest.raises(MessageBreakingFooterMissingBang):
        validate_commit_message("feat: Change API\n\nBREAKING CHANGE: Old thing removed\n")


@pytest.mark.parametrize("message", [
    "feat!: Change API\n",
    "feat!: Change API\n\n\n",
    "feat(api)!: Change API\n\nOnly a body\n",
])
def test_bang_requires_breaking_footer(message):
    with pytest.raises(MessageBangWithoutBreakingFooter):
        validate_commit_message(message)


@pytest.mark.parametrize("message", ["", "\n  \n", "# just a comment\n\n# another\n"])
def test_missing_subject(message):
    with pytest.raises(MessageSubjectMissing):
        validate_commit_message(message)


def test_invalid_subject_reports_trimmed_subject():
    with pytest.raises(MessageSubjectInvalidFormat) as excinfo:
        validate_commit_message("  Add a feature  \n")
    assert excinfo.value.subject == "Add a feature"


def test_empty_autosquash_target_is_invalid():
    with pytest.raises(MessageSubjectInvalidFormat):
        validate_commit_message("fixup! \n")


def test_unknown_type():
    with pytest.raises(CommitTypeInvalid):
        validate_commit_message("feature: Add thing\n")


def test_summary_period():
    with pytest.raises(SummaryEndsWithPeriod):
        validate_commit_message("fix: Handle input.\n")


def test_scope_rules_applied_after_body():
    with pytest.raises(ScopeEmpty):
        validate_commit_message("feat(): Add thing\n\nBody\n")
    with pytest.raises(ScopeHasClosingParen):
        validate_commit_message("feat(a)b): Add thing\n\nBody\n")


def test_subject_only_message_skips_scope_rules():
    assert validate_commit_message("feat(): Add thing\n") is None


def test_subject_too_long():
    subject = "feat: " + "a" * 45
    with pytest.raises(SubjectTooLong) as excinfo:
        validate_commit_message(subject + "\n")
    assert excinfo.value == SubjectTooLong(len=51, budget=44, subject=subject)


def test_body_line_too_long():
    with pytest.raises(BodyLineTooLong) as excinfo:
        validate_commit_message("fix: Handle input\n\n" + "a" * 73 + "\n")
    assert excinfo.value.len == 73


def test_breaking_footer_not_last():
    with pytest.raises(MessageBreakingFooterNotLast):
        validate_commit_message("feat!: Change API\n\nBREAKING CHANGE: a\n\nMore text\n")
    with pytest.raises(MessageBreakingFooterNotLast):
        validate_commit_message("feat!: Change API\n\nBody\nBREAKING CHANGE: a\n")


def test_breaking_footer_followed_by_comment_is_last():
    message = "feat!: Change API\n\nBREAKING CHANGE: a\n# trailing comment\n"
    assert validate_commit_message(message) is None


def test_empty_breaking_note():
    with pytest.raises(BreakingNoteEmpty):
        validate_commit_message("feat!: Change API\n\nBREAKING CHANGE:\n")


def test_first_violation_wins():
    # Subject length is checked before the blank line
    with pytest.raises(SubjectTooLong):
        validate_commit_message("feat: " + "a" * 45 + "\nBody\n")
    # Blank line is checked before bang consistency
    with pytest.raises(MessageMissingBlankLineAfterSubject):
        validate_commit_message("feat!: Change API\nBody\n")
    # Bang consistency is checked before the body
    with pytest.raises(MessageBreakingFooterMissingBang):
        validate_commit_message("feat: Change API\n\n" + "a" * 80 + "\n\nBREAKING CHANGE: x\n")


def test_generated_messages_validate():
    generator = CommitMessageGenerator()
    messages = [
        generator.generate("fix", "Handle empty input"),
        generator.generate("feat", "Add endpoint", scope="api", body="Explain\n\nMore"),
        generator.generate("refactor", "Split parser", breaking_note="Parser API moved"),
        generator.generate(
            "perf", "Cache lookups", scope="db", body="Why it helps", breaking_note="Config key renamed"
        ),
    ]
    for message in messages:
        assert validate_commit_message(message) is None


class RecordingObserver(ValidationObserver):
    def __init__(self):
        self.events = []

    def on_validation_completed(self, message, error):
        self.events.append((message, error))


def test_validator_facade():
    validator = CommitMessageValidator()

    is_valid, msg = validator.validate("fix: Handle empty input\n")
    assert is_valid
    assert msg == "Valid commit message"

    is_valid, msg = validator.validate("fix: Handle empty input\nBody\n")
    assert not is_valid
    assert "blank line after the subject" in msg


def test_validator_notifies_observers():
    observer = RecordingObserver()
    validator = CommitMessageValidator(observers=[observer])

    assert validator.check("fix: Handle empty input\n") is None
    error = validator.check("feat!: Change API\n")
    assert error == MessageBangWithoutBreakingFooter()

    assert observer.events == [
        ("fix: Handle empty input\n", None),
        ("feat!: Change API\n", MessageBangWithoutBreakingFooter()),
    ]

    validator.remove_observer(observer)
    validator.check("fix: Again\n")
    assert len(observer.events) == 2


@pytest.mark.parametrize("commit_type", list(CommitType))
@pytest.mark.parametrize("scope", [None, "core"])
@pytest.mark.parametrize("note", [None, "Config key renamed"])
@pytest.mark.parametrize("body", [None, "Explain the change.\n\n" + "w" * 72])
@pytest.mark.parametrize("summary_length", [1, 25, 36, 40, 44])
def test_composed_messages_validate_sweep(commit_type, scope, note, body, summary_length):
    summary = CommitSummary.parse("q" * summary_length)
    parsed_note = BreakingNote.parse(note) if note is not None else None
    try:
        subject = CommitSubject(
            commit_type,
            summary,
            scope=CommitScope.parse(scope) if scope is not None else None,
            breaking_note=parsed_note,
        )
    except SubjectTooLong:
        # Over-long subjects are covered by the subject sweep
        return
    parsed_body = CommitBody.parse(body) if body is not None else None

    message = new_commit_message(subject, parsed_body, parsed_note)
    assert validate_commit_message(message) is None
    assert validate_commit_message(message + "\n") is None
