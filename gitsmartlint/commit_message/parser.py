"""Commit message parsing.

Turns raw text into a ``ParsedCommit``. The parser is tolerant: anything
with at least one non-blank character parses, and the rules decide what is
wrong with it afterwards.
"""
import re
from typing import Optional, Sequence

from ..models import ParsedCommit, ParseFailure, ParseResult, ParseSuccess

EMPTY_MESSAGE_ERROR = "empty commit message"

# type, optional (scope), separator run, subject
HEADER_PATTERN = re.compile(r"([a-zA-Z]+)(?:\(([^)]*)\))?(\s*:?\s*)(.*)")


def pre_process(text: str) -> str:
    """Apply the trivial whitespace fix. Idempotent."""
    return text.strip()


def parse_commit_message(text: str) -> ParseResult:
    """Parse a commit message into its structured components.

    Args:
        text: Raw commit message text

    Returns:
        ParseSuccess with the parsed commit, or ParseFailure when the
        message is blank
    """
    trimmed = text.strip()
    if not trimmed:
        return ParseFailure(error=EMPTY_MESSAGE_ERROR)

    lines = trimmed.split("\n")
    header = lines[0]

    commit_type = None
    scope = None
    has_colon = False

    match = HEADER_PATTERN.fullmatch(header)
    if match:
        commit_type = match.group(1)
        scope = match.group(2)
        has_colon = ":" in match.group(3)
        subject = match.group(4).strip() or None
    else:
        subject = header.strip() or None

    body_start = find_body_start_index(lines)
    body = None
    if body_start is not None:
        body = "\n".join(lines[body_start:]).strip() or None

    return ParseSuccess(
        parsed=ParsedCommit(
            raw=text,
            header=header,
            type=commit_type,
            scope=scope,
            subject=subject,
            has_colon=has_colon,
            body=body,
            lines=tuple(lines),
        )
    )


def find_body_start_index(lines: Sequence[str]) -> Optional[int]:
    """Return the index of the first body line, or None if there is no body.

    The body starts after the first blank line below the header, and only
    counts when something non-blank follows that blank line.
    """
    if len(lines) < 2:
        return None

    blank_index = next(
        (i for i in range(1, len(lines)) if not lines[i].strip()), None
    )
    if blank_index is None or blank_index >= len(lines) - 1:
        return None

    if any(line.strip() for line in lines[blank_index + 1:]):
        return blank_index + 1
    return None


def has_body_without_blank_line(lines: Sequence[str]) -> bool:
    """Check whether the line right after the header has content.

    Deliberately independent from ``find_body_start_index``: a two-line
    message with no blank line has no body, yet this still reports True.
    """
    if len(lines) < 2:
        return False
    return bool(lines[1].strip())
