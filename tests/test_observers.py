"""Tests for lint observers."""
from io import StringIO

from rich.console import Console

from gitsmartlint.commit_message import CommitMessageValidator
from gitsmartlint.observers import ConsoleLogObserver, FileLogObserver, summarize_issues


def test_summarize_issues():
    issues = CommitMessageValidator().lint("Fix bug.")
    assert summarize_issues(issues) == "2 error(s), 1 warning(s)"
    assert summarize_issues(()) == "0 error(s), 0 warning(s)"


def test_console_observer():
    output = StringIO()
    observer = ConsoleLogObserver(Console(file=output, width=120))

    observer.on_lint_completed("feat: x", ())
    observer.on_fix_applied("FEAT: x", "feat: x")
    observer.on_fix_applied("feat: x", "feat: x")

    text = output.getvalue()
    assert "Lint finished: 0 error(s), 0 warning(s)" in text
    assert "Applied fixes to commit message" in text
    assert "No fixes changed the message" in text


def test_file_observer(tmp_path):
    log_file = tmp_path / "logs" / "lint.log"
    observer = FileLogObserver(str(log_file))

    issues = CommitMessageValidator().lint("FEAT: thing\nbody")
    observer.on_lint_completed("FEAT: thing\nbody", issues)
    observer.on_fix_applied("FEAT: thing\nbody", "feat: thing\n\nbody")

    lines = log_file.read_text().splitlines()
    assert "Linted 'FEAT: thing': 2 error(s), 0 warning(s)" in lines[0]
    assert "[R2] error:" in lines[1]
    assert "[R8] error:" in lines[2]
    assert "Fixed 'FEAT: thing' -> 'feat: thing'" in lines[3]
