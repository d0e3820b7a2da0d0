"""Tests for the commit message rules."""
import pytest

from gitsmartlint.commit_message.validation import (
    BlankLineHandler,
    ColonHandler,
    HeaderExistsHandler,
    RuleHandler,
    create_rule_chain,
    get_required_choices,
    is_valid_scope,
    requires_user_choice,
)
from gitsmartlint.commit_message.parser import parse_commit_message
from gitsmartlint.models import (
    ChoiceKind,
    EnsureBlankLine,
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


def rules_of(issues):
    return [issue.rule for issue in issues]


def test_valid_message_has_no_issues(lint):
    assert lint("feat(core): add parser") == ()
    assert lint("fix: handle empty input\n\nThe parser now accepts blank lines.") == ()


def test_empty_header_handler():
    handler = HeaderExistsHandler()
    parsed = ParsedCommit(raw="", header="  ", lines=("  ",))
    issues = list(handler.check(parsed))
    assert len(issues) == 1
    assert issues[0].rule == RuleId.R1
    assert issues[0].severity == Severity.ERROR
    assert issues[0].fix is None


def test_uppercase_type_gets_lowercase_fix(lint):
    issues = lint("FEAT: thing")
    assert rules_of(issues) == [RuleId.R2]
    assert issues[0].severity == Severity.ERROR
    assert issues[0].fix == LowercaseType(original="FEAT")
    assert '"FEAT"' in issues[0].message


def test_missing_type_requires_choice(lint):
    issues = lint(": add thing")
    assert rules_of(issues) == [RuleId.R2]
    assert issues[0].fix == RequireUserChoice(choice_type=ChoiceKind.TYPE)
    assert "Missing commit type" in issues[0].message


def test_unknown_type_requires_choice(lint):
    issues = lint("foo: bar")
    assert rules_of(issues) == [RuleId.R2]
    assert isinstance(issues[0].fix, RequireUserChoice)
    assert 'Invalid type "foo"' in issues[0].message
    assert "feat, fix, docs" in issues[0].message


@pytest.mark.parametrize(
    "scope",
    ["core", "core-api", "core_api", "Core-API", "v2", "core -api", "a-b_c"],
)
def test_valid_scopes(scope):
    assert is_valid_scope(scope)


@pytest.mark.parametrize("scope", ["core api", "core.api", "-core", "core-", "core/api", " "])
def test_invalid_scopes(scope):
    assert not is_valid_scope(scope)


def test_invalid_scope_is_reported(lint):
    issues = lint("feat(core.api): thing")
    assert rules_of(issues) == [RuleId.R3]
    assert issues[0].fix is None
    assert "core.api" in issues[0].message


def test_empty_scope_is_allowed(lint):
    assert lint("feat(): thing") == ()


def test_missing_colon(lint):
    issues = lint("feat add thing")
    assert rules_of(issues) == [RuleId.R4]
    assert issues[0].fix == InsertColon()


def test_missing_colon_needs_a_type(lint):
    assert RuleId.R4 not in rules_of(lint("123 add thing"))


def test_empty_subject(lint):
    issues = lint("feat:")
    assert rules_of(issues) == [RuleId.R5]
    assert issues[0].fix is None


def test_trailing_period(lint):
    issues = lint("feat: add thing.")
    assert rules_of(issues) == [RuleId.R6]
    assert issues[0].severity == Severity.WARNING
    assert issues[0].fix == RemoveTrailingPeriod()


def test_header_length_warning(lint):
    header = "feat: " + "a" * 67
    assert len(header) == 73
    issues = lint(header)
    assert rules_of(issues) == [RuleId.R7]
    assert issues[0].severity == Severity.WARNING
    assert "73" in issues[0].message


def test_header_length_limit_is_inclusive(lint):
    assert lint("feat: " + "a" * 66) == ()


def test_header_length_error_excludes_warning(lint):
    header = "feat: " + "a" * 95
    assert len(header) == 101
    r7 = [issue for issue in lint(header) if issue.rule == RuleId.R7]
    assert len(r7) == 1
    assert r7[0].severity == Severity.ERROR


def test_blank_line_handler():
    handler = BlankLineHandler()
    parsed = parse_commit_message("feat(core): add parser\nsome body line").parsed
    issues = list(handler.check(parsed))
    assert rules_of(issues) == [RuleId.R8]
    assert issues[0].fix == EnsureBlankLine()

    parsed = parse_commit_message("feat(core): add parser\n\nsome body line").parsed
    assert list(handler.check(parsed)) == []


@pytest.mark.parametrize(
    "length,expected",
    [(70, None), (75, None), (76, Severity.WARNING), (80, Severity.WARNING), (100, Severity.WARNING), (101, Severity.ERROR)],
)
def test_line_length(lint, length, expected):
    issues = [i for i in lint("feat: x\n\n" + "a" * length) if i.rule == RuleId.R9]
    if expected is None:
        assert issues == []
    else:
        assert len(issues) == 1
        assert issues[0].severity == expected
        assert issues[0].fix == WrapLongLine(line_index=2)
        assert "Line 3 exceeds" in issues[0].message
        assert f"({length})" in issues[0].message


def test_line_length_issues_are_in_line_order(lint):
    text = "feat: x\n\n" + "a" * 80 + "\nshort\n" + "b" * 120 + "\n" + "c" * 90
    issues = [i for i in lint(text) if i.rule == RuleId.R9]
    assert [i.fix.line_index for i in issues] == [2, 4, 5]
    assert [i.severity for i in issues] == [Severity.WARNING, Severity.ERROR, Severity.WARNING]


def test_issues_follow_rule_order(lint):
    issues = lint("FEAT(bad scope) thing.\n" + "b" * 80)
    assert rules_of(issues) == [
        RuleId.R2,
        RuleId.R3,
        RuleId.R4,
        RuleId.R6,
        RuleId.R8,
        RuleId.R9,
    ]


def test_chain_runs_every_handler():
    chain = create_rule_chain()
    handlers = []
    handler = chain
    while handler is not None:
        assert isinstance(handler, RuleHandler)
        handlers.append(handler.rule)
        handler = handler.next_handler
    assert handlers == list(RuleId)


def test_chain_does_not_stop_at_first_issue():
    chain = ColonHandler(BlankLineHandler())
    parsed = parse_commit_message("feat thing\nbody").parsed
    assert rules_of(chain.handle(parsed)) == [RuleId.R4, RuleId.R8]


def test_issues_are_immutable(lint):
    issues = lint("FEAT: thing")
    assert isinstance(issues, tuple)
    with pytest.raises(Exception):
        issues[0].message = "changed"


def test_requires_user_choice(lint):
    assert requires_user_choice(lint("foo: bar"))
    assert not requires_user_choice(lint("FEAT: thing"))
    assert not requires_user_choice(())


def test_get_required_choices_dedupes():
    choose = RequireUserChoice(choice_type=ChoiceKind.TYPE)
    issues = [
        Issue(rule=RuleId.R2, severity=Severity.ERROR, message="a", fix=choose),
        Issue(rule=RuleId.R4, severity=Severity.ERROR, message="b", fix=InsertColon()),
        Issue(rule=RuleId.R2, severity=Severity.ERROR, message="c", fix=choose),
    ]
    assert get_required_choices(issues) == (ChoiceKind.TYPE,)
    assert get_required_choices([]) == ()
