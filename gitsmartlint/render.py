"""Rich rendering of lint results."""
from typing import Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ChoiceKind, CommitType, Issue, RequireUserChoice, Severity

SEVERITY_LABELS = {
    Severity.ERROR: "ERROR",
    Severity.WARNING: "WARNING",
}

SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "bold yellow",
}

TYPE_LABELS = {
    CommitType.FEAT: "feat - new feature",
    CommitType.FIX: "fix - bug fix",
    CommitType.DOCS: "docs - documentation",
    CommitType.STYLE: "style - code formatting",
    CommitType.REFACTOR: "refactor - refactoring",
    CommitType.PERF: "perf - performance improvement",
    CommitType.TEST: "test - tests",
    CommitType.BUILD: "build - build system",
    CommitType.CI: "ci - continuous integration",
    CommitType.CHORE: "chore - maintenance tasks",
    CommitType.REVERT: "revert - revert changes",
}

NO_ISSUES_MESSAGE = "No issues found - the commit message is valid!"


def is_fixable(issue: Issue) -> bool:
    """Whether a fix can be triggered for this issue without a user decision."""
    return issue.fix is not None and not isinstance(issue.fix, RequireUserChoice)


def severity_badge(severity: Severity) -> Text:
    return Text(SEVERITY_LABELS[severity], style=SEVERITY_STYLES[severity])


def issues_table(issues: Sequence[Issue]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Severity")
    table.add_column("Rule")
    table.add_column("Message")
    table.add_column("Fix")

    for index, issue in enumerate(issues):
        if is_fixable(issue):
            fix_label = Text(issue.fix.kind, style="cyan")
        elif issue.fix is not None:
            fix_label = Text(f"choose {issue.fix.choice_type.value}", style="magenta")
        else:
            fix_label = Text("-", style="dim")
        table.add_row(
            str(index),
            severity_badge(issue.severity),
            issue.rule.value,
            Text(issue.message),
            fix_label,
        )
    return table


def render_issues(console: Console, issues: Sequence[Issue]) -> None:
    if not issues:
        console.print(f"[green]{NO_ISSUES_MESSAGE}[/green]")
        return
    console.print(issues_table(issues))


def type_choices_text(selected: Optional[CommitType] = None) -> Text:
    text = Text()
    for commit_type in CommitType:
        marker = "> " if commit_type == selected else "  "
        style = "bold green" if commit_type == selected else ""
        text.append(f"{marker}{TYPE_LABELS[commit_type]}\n", style=style)
    return text


def render_choice_prompt(
    console: Console, kind: ChoiceKind, selected: Optional[CommitType] = None
) -> None:
    if kind == ChoiceKind.TYPE:
        console.print(
            Panel(type_choices_text(selected), title="Choose a commit type", border_style="magenta")
        )


def render_fixed_message(console: Console, message: str) -> None:
    console.print(Panel(Text(message), title="Fixed message", border_style="green"))
