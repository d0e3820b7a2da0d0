"""Commit message rules using Chain of Responsibility pattern.

Unlike a fail-fast chain, every handler runs: each one appends its issues
and hands the accumulated tuple to the next. The chain order is the issue
order, which callers rely on for stable indexing.
"""
import re
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

from ..models import (
    VALID_TYPES,
    ChoiceKind,
    EnsureBlankLine,
    FixAction,
    InsertColon,
    Issue,
    LowercaseType,
    ParsedCommit,
    RemoveTrailingPeriod,
    RequireUserChoice,
    RuleId,
    Severity,
    WrapLongLine,
)
from .parser import has_body_without_blank_line

HEADER_MAX_LENGTH = 100
HEADER_WARN_LENGTH = 72
LINE_MAX_LENGTH = 100
LINE_WARN_LENGTH = 75

SCOPE_PATTERN = re.compile(r"[a-z0-9]+(?: ?[-_][a-z0-9]+)*", re.IGNORECASE)

ALLOWED_TYPES = ", ".join(VALID_TYPES)


def create_issue(
    rule: RuleId, severity: Severity, message: str, fix: Optional[FixAction] = None
) -> Issue:
    return Issue(rule=rule, severity=severity, message=message, fix=fix)


def is_valid_type(value: str) -> bool:
    return value in VALID_TYPES


def is_valid_type_case_insensitive(value: str) -> bool:
    return value.lower() in VALID_TYPES


def is_valid_scope(scope: str) -> bool:
    return SCOPE_PATTERN.fullmatch(scope) is not None


class RuleHandler(ABC):
    """Abstract base class for rule handlers."""

    rule: RuleId

    def __init__(self, next_handler: Optional["RuleHandler"] = None):
        self.next_handler = next_handler

    def handle(
        self, parsed: ParsedCommit, issues: Tuple[Issue, ...] = ()
    ) -> Tuple[Issue, ...]:
        """Run this check, then pass the accumulated issues down the chain."""
        found = issues + tuple(self.check(parsed))
        if not self.next_handler:
            return found
        return self.next_handler.handle(parsed, found)

    @abstractmethod
    def check(self, parsed: ParsedCommit) -> Iterable[Issue]:
        """Return the issues this rule finds in the parsed commit."""
        pass


class HeaderExistsHandler(RuleHandler):
    """Validates that the header is not empty."""

    rule = RuleId.R1

    def check(self, parsed: ParsedCommit) -> List[Issue]:
        if not parsed.header.strip():
            return [create_issue(self.rule, Severity.ERROR, "Header must exist and must not be empty")]
        return []


class CommitTypeHandler(RuleHandler):
    """Validates the commit type against the allowed vocabulary.

    A type that only differs in case gets an automatic lowercase fix;
    a missing or unknown type needs the user to pick one.
    """

    rule = RuleId.R2

    def check(self, parsed: ParsedCommit) -> List[Issue]:
        choose_type = RequireUserChoice(choice_type=ChoiceKind.TYPE)

        if parsed.type is None:
            return [
                create_issue(
                    self.rule,
                    Severity.ERROR,
                    f"Missing commit type. Allowed: {ALLOWED_TYPES}",
                    choose_type,
                )
            ]

        if is_valid_type(parsed.type):
            return []

        if is_valid_type_case_insensitive(parsed.type):
            return [
                create_issue(
                    self.rule,
                    Severity.ERROR,
                    f'Type "{parsed.type}" should be lowercase',
                    LowercaseType(original=parsed.type),
                )
            ]

        return [
            create_issue(
                self.rule,
                Severity.ERROR,
                f'Invalid type "{parsed.type}". Allowed: {ALLOWED_TYPES}',
                choose_type,
            )
        ]


class ScopeFormatHandler(RuleHandler):
    """Validates that a non-empty scope is kebab-case or snake_case."""

    rule = RuleId.R3

    def check(self, parsed: ParsedCommit) -> List[Issue]:
        if not parsed.scope or is_valid_scope(parsed.scope):
            return []
        return [
            create_issue(
                self.rule,
                Severity.ERROR,
                f'Scope "{parsed.scope}" must be kebab-case or snake_case '
                "(letters, digits, -, _)",
            )
        ]


class ColonHandler(RuleHandler):
    """Validates the colon after type/scope."""

    rule = RuleId.R4

    def check(self, parsed: ParsedCommit) -> List[Issue]:
        if parsed.type is not None and not parsed.has_colon:
            return [
                create_issue(
                    self.rule,
                    Severity.ERROR,
                    "Missing colon after type/scope",
                    InsertColon(),
                )
            ]
        return []


class SubjectHandler(RuleHandler):
    """Validates that a well-formed header has a subject."""

    rule = RuleId.R5

    def check(self, parsed: ParsedCommit) -> List[Issue]:
        if parsed.type is not None and parsed.has_colon and not parsed.subject:
            return [create_issue(self.rule, Severity.ERROR, "Subject must not be empty")]
        return []


class SubjectPeriodHandler(RuleHandler):
    """Validates that the subject doesn't end with a period."""

    rule = RuleId.R6

    def check(self, parsed: ParsedCommit) -> List[Issue]:
        if parsed.subject and parsed.subject.endswith("."):
            return [
                create_issue(
                    self.rule,
                    Severity.WARNING,
                    "Subject should not end with a period",
                    RemoveTrailingPeriod(),
                )
            ]
        return []


class HeaderLengthHandler(RuleHandler):
    """Validates the header length. Error and warning are exclusive."""

    rule = RuleId.R7

    def check(self, parsed: ParsedCommit) -> List[Issue]:
        length = len(parsed.header)
        if length > HEADER_MAX_LENGTH:
            return [
                create_issue(
                    self.rule,
                    Severity.ERROR,
                    f"Header too long ({length} characters). Maximum is {HEADER_MAX_LENGTH}.",
                )
            ]
        if length > HEADER_WARN_LENGTH:
            return [
                create_issue(
                    self.rule,
                    Severity.WARNING,
                    f"Header length ({length} characters) exceeds the "
                    f"recommended {HEADER_WARN_LENGTH}.",
                )
            ]
        return []


class BlankLineHandler(RuleHandler):
    """Validates blank line after the header."""

    rule = RuleId.R8

    def check(self, parsed: ParsedCommit) -> List[Issue]:
        if has_body_without_blank_line(parsed.lines):
            return [
                create_issue(
                    self.rule,
                    Severity.ERROR,
                    "Body must be separated from the header by a blank line",
                    EnsureBlankLine(),
                )
            ]
        return []


class LineLengthHandler(RuleHandler):
    """Validates the length of every line, header included."""

    rule = RuleId.R9

    def check(self, parsed: ParsedCommit) -> List[Issue]:
        issues = []
        for index, line in enumerate(parsed.lines):
            length = len(line)
            if length > LINE_MAX_LENGTH:
                severity, limit = Severity.ERROR, LINE_MAX_LENGTH
            elif length > LINE_WARN_LENGTH:
                severity, limit = Severity.WARNING, LINE_WARN_LENGTH
            else:
                continue
            issues.append(
                create_issue(
                    self.rule,
                    severity,
                    f"Line {index + 1} exceeds {limit} characters ({length})",
                    WrapLongLine(line_index=index),
                )
            )
        return issues


def create_rule_chain() -> RuleHandler:
    """Create the fixed rule chain, R1 first and R9 last."""
    line_length = LineLengthHandler()
    blank_line = BlankLineHandler(line_length)
    header_length = HeaderLengthHandler(blank_line)
    subject_period = SubjectPeriodHandler(header_length)
    subject = SubjectHandler(subject_period)
    colon = ColonHandler(subject)
    scope = ScopeFormatHandler(colon)
    commit_type = CommitTypeHandler(scope)
    header_exists = HeaderExistsHandler(commit_type)

    return header_exists


RULE_CHAIN = create_rule_chain()


def lint_commit(parsed: ParsedCommit) -> Tuple[Issue, ...]:
    """Lint a parsed commit against all rules, in rule order."""
    return RULE_CHAIN.handle(parsed)


def requires_user_choice(issues: Iterable[Issue]) -> bool:
    """Check if any issue's fix needs a decision from the user."""
    return any(isinstance(issue.fix, RequireUserChoice) for issue in issues)


def get_required_choices(issues: Iterable[Issue]) -> Tuple[ChoiceKind, ...]:
    """Collect the choice kinds the issues need, deduplicated in first-seen order."""
    kinds: List[ChoiceKind] = []
    for issue in issues:
        if isinstance(issue.fix, RequireUserChoice) and issue.fix.choice_type not in kinds:
            kinds.append(issue.fix.choice_type)
    return tuple(kinds)
