"""Shared models for git-smart-lint."""
from enum import Enum
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class CommitType(str, Enum):
    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    BUILD = "build"
    CI = "ci"
    CHORE = "chore"
    REVERT = "revert"


VALID_TYPES: Tuple[str, ...] = tuple(commit_type.value for commit_type in CommitType)


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class RuleId(str, Enum):
    R1 = "R1"
    R2 = "R2"
    R3 = "R3"
    R4 = "R4"
    R5 = "R5"
    R6 = "R6"
    R7 = "R7"
    R8 = "R8"
    R9 = "R9"


class ChoiceKind(str, Enum):
    """Kinds of decision a fix can defer to the user."""

    TYPE = "type"


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# Fix actions. Each variant carries only what is needed to re-derive its edit.

class TrimWhitespace(FrozenModel):
    kind: Literal["trim-whitespace"] = "trim-whitespace"


class LowercaseType(FrozenModel):
    kind: Literal["lowercase-type"] = "lowercase-type"
    original: str


class InsertColon(FrozenModel):
    kind: Literal["insert-colon"] = "insert-colon"


class RemoveTrailingPeriod(FrozenModel):
    kind: Literal["remove-trailing-period"] = "remove-trailing-period"


class EnsureBlankLine(FrozenModel):
    kind: Literal["ensure-blank-line"] = "ensure-blank-line"


class WrapLongLine(FrozenModel):
    kind: Literal["wrap-long-line"] = "wrap-long-line"
    line_index: int = Field(ge=0)


class RequireUserChoice(FrozenModel):
    kind: Literal["require-user-choice"] = "require-user-choice"
    choice_type: ChoiceKind = ChoiceKind.TYPE


FixAction = Annotated[
    Union[
        TrimWhitespace,
        LowercaseType,
        InsertColon,
        RemoveTrailingPeriod,
        EnsureBlankLine,
        WrapLongLine,
        RequireUserChoice,
    ],
    Field(discriminator="kind"),
]


class Issue(FrozenModel):
    """A single rule violation with an optional auto-fix."""

    rule: RuleId
    severity: Severity
    message: str
    fix: Optional[FixAction] = None


class ParsedCommit(FrozenModel):
    """Structured representation of a commit message.

    ``type``, ``scope``, ``subject`` and ``has_colon`` come from the header
    alone; ``body`` comes from ``lines[1:]``.
    """

    raw: str
    header: str
    type: Optional[str] = None
    scope: Optional[str] = None
    subject: Optional[str] = None
    has_colon: bool = False
    body: Optional[str] = None
    lines: Tuple[str, ...]


class ParseSuccess(FrozenModel):
    ok: Literal[True] = True
    parsed: ParsedCommit


class ParseFailure(FrozenModel):
    ok: Literal[False] = False
    error: str


ParseResult = Union[ParseSuccess, ParseFailure]


class UserChoices(FrozenModel):
    """Caller-supplied answers for fixes that cannot be decided automatically."""

    type: Optional[CommitType] = None

    def get(self, kind: ChoiceKind) -> Optional[CommitType]:
        if kind == ChoiceKind.TYPE:
            return self.type
        return None
