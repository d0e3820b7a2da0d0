"""Observer pattern for lint and fix events."""

from abc import ABC, abstractmethod
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console

from .models import Issue, Severity


def summarize_issues(issues: Sequence[Issue]) -> str:
    counts = Counter(issue.severity for issue in issues)
    return f"{counts[Severity.ERROR]} error(s), {counts[Severity.WARNING]} warning(s)"


class LintObserver(ABC):
    """Abstract base class for lint observers."""

    @abstractmethod
    def on_lint_completed(self, text: str, issues: Sequence[Issue]) -> None:
        """Called when a message has been linted."""
        pass

    @abstractmethod
    def on_fix_applied(self, before: str, after: str) -> None:
        """Called when fixes have been applied to a message."""
        pass


class ConsoleLogObserver(LintObserver):
    """Observer that logs lint events to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def on_lint_completed(self, text: str, issues: Sequence[Issue]) -> None:
        color = "red" if any(i.severity == Severity.ERROR for i in issues) else "green"
        self.console.print(f"[{color}]Lint finished: {summarize_issues(issues)}[/{color}]")

    def on_fix_applied(self, before: str, after: str) -> None:
        if before == after:
            self.console.print("[yellow]No fixes changed the message[/yellow]")
        else:
            self.console.print("[green]Applied fixes to commit message[/green]")


class FileLogObserver(LintObserver):
    """Observer that logs lint events to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a") as f:
            f.write(f"{timestamp} - {message}\n")

    def on_lint_completed(self, text: str, issues: Sequence[Issue]) -> None:
        header = text.split("\n")[0]
        self._log(f"Linted '{header}': {summarize_issues(issues)}")
        for issue in issues:
            self._log(f"  [{issue.rule.value}] {issue.severity.value}: {issue.message}")

    def on_fix_applied(self, before: str, after: str) -> None:
        status = "Fixed" if before != after else "Nothing to fix in"
        self._log(f"{status} '{before.split(chr(10))[0]}' -> '{after.split(chr(10))[0]}'")
