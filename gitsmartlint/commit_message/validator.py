"""Commit message validation."""
from typing import Optional, Tuple

from ..models import Issue, ParseFailure, RuleId, Severity, UserChoices
from .fixes import apply_fixes
from .parser import parse_commit_message, pre_process
from .validation import lint_commit


class CommitMessageValidator:
    """Validates commit messages against conventional commit standards."""

    def lint(self, message: str) -> Tuple[Issue, ...]:
        """Lint a raw message.

        A blank message cannot be parsed; it is reported as a single R1
        error so callers can treat it like any other issue.
        """
        result = parse_commit_message(pre_process(message))
        if isinstance(result, ParseFailure):
            return (Issue(rule=RuleId.R1, severity=Severity.ERROR, message=result.error),)
        return lint_commit(result.parsed)

    def validate(self, message: str) -> Tuple[bool, str]:
        """Validate a commit message against standards."""
        errors = [issue for issue in self.lint(message) if issue.severity == Severity.ERROR]
        if errors:
            return False, errors[0].message
        return True, "Valid commit message"

    def fix(self, message: str, user_choices: Optional[UserChoices] = None) -> str:
        """Pre-process, lint and apply every available fix."""
        text = pre_process(message)
        return apply_fixes(text, self.lint(text), user_choices)
