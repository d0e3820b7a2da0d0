"""Lint session state.

Holds what an interactive front end needs between user actions. Every
transition returns a new session; the pipeline is re-run from scratch
after each change to the text.
"""
from typing import Tuple

from pydantic import BaseModel, ConfigDict

from .commit_message.fixes import apply_fixes, apply_single_issue_fix
from .commit_message.parser import pre_process
from .commit_message.validation import get_required_choices, requires_user_choice
from .commit_message.validator import CommitMessageValidator
from .models import ChoiceKind, CommitType, Issue, RequireUserChoice, UserChoices

_validator = CommitMessageValidator()


class LintSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_text: str = ""
    fixed_text: str = ""
    issues: Tuple[Issue, ...] = ()
    user_choices: UserChoices = UserChoices()

    def update_from_input(self, text: str) -> "LintSession":
        """Lint new input. Pending user choices are dropped."""
        processed = pre_process(text)
        return self.model_copy(
            update={
                "current_text": processed,
                "issues": _validator.lint(processed),
                "user_choices": UserChoices(),
            }
        )

    def with_choice(self, kind: ChoiceKind, value: CommitType) -> "LintSession":
        choices = self.user_choices.model_copy(update={kind.value: CommitType(value)})
        return self.model_copy(update={"user_choices": choices})

    @property
    def needs_user_choice(self) -> bool:
        return requires_user_choice(self.issues)

    @property
    def required_choices(self) -> Tuple[ChoiceKind, ...]:
        return get_required_choices(self.issues)

    def has_all_required_choices(self) -> bool:
        return all(self.user_choices.get(kind) is not None for kind in self.required_choices)

    def fixable_issues(self) -> Tuple[Tuple[int, Issue], ...]:
        """Issues that can be fixed on their own, with their positions."""
        return tuple(
            (index, issue)
            for index, issue in enumerate(self.issues)
            if issue.fix is not None and not isinstance(issue.fix, RequireUserChoice)
        )

    def apply_all(self) -> "LintSession":
        """Apply every fix, then re-lint the result."""
        fixed = apply_fixes(self.current_text, self.issues, self.user_choices)
        return self.model_copy(update={"fixed_text": fixed}).update_from_input(fixed)

    def apply_issue(self, index: int) -> "LintSession":
        """Apply the fix of the issue at ``index``, then re-lint."""
        fixed = apply_single_issue_fix(self.current_text, self.issues[index], self.user_choices)
        return self.update_from_input(fixed)
