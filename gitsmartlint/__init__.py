"""Lint and auto-fix conventional commit messages."""

__version__ = "0.3.0"

from .commit_message import (
    CommitMessageValidator,
    apply_fixes,
    apply_single_issue_fix,
    get_required_choices,
    lint_commit,
    parse_commit_message,
    pre_process,
    requires_user_choice,
)
from .models import (
    VALID_TYPES,
    ChoiceKind,
    CommitType,
    EnsureBlankLine,
    FixAction,
    InsertColon,
    Issue,
    LowercaseType,
    ParsedCommit,
    ParseFailure,
    ParseSuccess,
    RemoveTrailingPeriod,
    RequireUserChoice,
    RuleId,
    Severity,
    TrimWhitespace,
    UserChoices,
    WrapLongLine,
)

__all__ = [
    "__version__",
    "parse_commit_message",
    "pre_process",
    "lint_commit",
    "requires_user_choice",
    "get_required_choices",
    "apply_fixes",
    "apply_single_issue_fix",
    "CommitMessageValidator",
    "VALID_TYPES",
    "ChoiceKind",
    "CommitType",
    "Issue",
    "FixAction",
    "TrimWhitespace",
    "LowercaseType",
    "InsertColon",
    "RemoveTrailingPeriod",
    "EnsureBlankLine",
    "WrapLongLine",
    "RequireUserChoice",
    "ParsedCommit",
    "ParseFailure",
    "ParseSuccess",
    "RuleId",
    "Severity",
    "UserChoices",
]
