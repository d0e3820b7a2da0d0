"""Commit message parsing, linting and fixing."""

from .fixes import apply_fix_action, apply_fixes, apply_single_issue_fix, wrap_at_width
from .parser import (
    find_body_start_index,
    has_body_without_blank_line,
    parse_commit_message,
    pre_process,
)
from .validation import get_required_choices, lint_commit, requires_user_choice
from .validator import CommitMessageValidator

__all__ = [
    'parse_commit_message',
    'pre_process',
    'find_body_start_index',
    'has_body_without_blank_line',
    'lint_commit',
    'requires_user_choice',
    'get_required_choices',
    'apply_fixes',
    'apply_single_issue_fix',
    'apply_fix_action',
    'wrap_at_width',
    'CommitMessageValidator',
]
