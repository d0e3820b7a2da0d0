"""Applying fixes to commit messages.

Fixes are folded left to right over the text, each one working on the
output of the previous one. A fix whose pattern no longer matches leaves
the text unchanged.
"""
import re
from typing import Iterable, List, Optional

from ..models import (
    ChoiceKind,
    EnsureBlankLine,
    FixAction,
    InsertColon,
    Issue,
    LowercaseType,
    ParseFailure,
    RemoveTrailingPeriod,
    RequireUserChoice,
    TrimWhitespace,
    UserChoices,
    WrapLongLine,
)
from .parser import parse_commit_message

WRAP_WIDTH = 72

LOOSE_HEADER_PATTERN = re.compile(r"([a-zA-Z]+)(\([^)]*\))?(\s*)(.*)")
TRAILING_PERIOD_PATTERN = re.compile(r"\.\s*\Z")
LEADING_TYPE_PATTERN = re.compile(r"^[a-zA-Z]+")


def apply_fixes(
    text: str, issues: Iterable[Issue], user_choices: Optional[UserChoices] = None
) -> str:
    """Apply every available fix, in issue order.

    Args:
        text: Original commit text
        issues: Lint issues; those without a fix are skipped
        user_choices: Answers for fixes that need a user decision

    Returns:
        The fixed commit text
    """
    choices = user_choices or UserChoices()
    result = text
    for issue in issues:
        if issue.fix is not None:
            result = apply_fix_action(result, issue.fix, choices)
    return result


def apply_single_issue_fix(
    text: str, issue: Issue, user_choices: Optional[UserChoices] = None
) -> str:
    """Apply one issue's fix to the text."""
    if issue.fix is None:
        return text
    return apply_fix_action(text, issue.fix, user_choices or UserChoices())


def apply_fix_action(text: str, fix: FixAction, user_choices: UserChoices) -> str:
    """Apply a single fix action to the text."""
    if isinstance(fix, TrimWhitespace):
        return text.strip()
    if isinstance(fix, LowercaseType):
        return lowercase_type(text, fix.original)
    if isinstance(fix, InsertColon):
        return insert_colon_after_type_scope(text)
    if isinstance(fix, RemoveTrailingPeriod):
        return remove_trailing_period(text)
    if isinstance(fix, EnsureBlankLine):
        return ensure_blank_line_after_header(text)
    if isinstance(fix, WrapLongLine):
        return wrap_long_line(text, fix.line_index)
    if isinstance(fix, RequireUserChoice):
        return apply_user_choice(text, fix.choice_type, user_choices)
    raise TypeError(f"Unknown fix action: {fix!r}")


def _replace_header(text: str, transform) -> str:
    lines = text.split("\n")
    lines[0] = transform(lines[0])
    return "\n".join(lines)


def lowercase_type(text: str, original: str) -> str:
    pattern = re.compile("^" + re.escape(original), re.IGNORECASE)
    return pattern.sub(lambda _: original.lower(), text, count=1)


def insert_colon_after_type_scope(text: str) -> str:
    def fix_header(header: str) -> str:
        match = LOOSE_HEADER_PATTERN.fullmatch(header)
        if not match:
            return header
        commit_type, scope, _, rest = match.groups()
        subject = rest.strip()
        return f"{commit_type}{scope or ''}: {subject}" if subject else f"{commit_type}{scope or ''}: "

    return _replace_header(text, fix_header)


def remove_trailing_period(text: str) -> str:
    return _replace_header(text, lambda header: TRAILING_PERIOD_PATTERN.sub("", header))


def ensure_blank_line_after_header(text: str) -> str:
    lines = text.split("\n")
    if len(lines) < 2 or not lines[1].strip():
        return text
    return "\n".join([lines[0], ""] + lines[1:])


def wrap_long_line(text: str, line_index: int) -> str:
    lines = text.split("\n")
    # Earlier fixes may have changed the line count.
    if line_index >= len(lines):
        return text
    lines[line_index] = wrap_at_width(lines[line_index], WRAP_WIDTH)
    return "\n".join(lines)


def wrap_at_width(text: str, width: int) -> str:
    """Greedily re-flow words so each line stays within width where possible.

    A single word longer than width gets a line of its own. Runs of
    whitespace between words collapse to one space.
    """
    wrapped: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if len(candidate) <= width or not current:
            current = candidate
        else:
            wrapped.append(current)
            current = word
    if current:
        wrapped.append(current)
    return "\n".join(wrapped)


def apply_user_choice(text: str, choice_type: ChoiceKind, user_choices: UserChoices) -> str:
    """Apply the user's chosen value for a deferred fix.

    The chosen type replaces whatever leading type the header has, even
    one that was already valid.
    """
    chosen = user_choices.get(choice_type)
    if chosen is None:
        return text

    result = parse_commit_message(text)
    if isinstance(result, ParseFailure):
        return text

    chosen_type = chosen.value
    if result.parsed.type is None:
        colon_index = text.find(":")
        if colon_index != -1:
            return f"{chosen_type}{text[colon_index:]}"
        return f"{chosen_type}: {text.strip()}"

    return LEADING_TYPE_PATTERN.sub(chosen_type, text, count=1)
