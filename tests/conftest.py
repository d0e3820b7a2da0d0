import pytest
from click.testing import CliRunner

from gitsmartlint.commit_message import CommitMessageValidator, lint_commit, parse_commit_message


@pytest.fixture
def cli_runner():
    """Fixture for testing CLI commands."""
    return CliRunner()


@pytest.fixture
def validator():
    return CommitMessageValidator()


@pytest.fixture
def lint():
    """Parse and lint a message that is known to be non-blank."""
    def _lint(text):
        result = parse_commit_message(text)
        assert result.ok
        return lint_commit(result.parsed)
    return _lint


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep developer settings out of the tests."""
    for name in [
        "GIT_SMART_LINT_STRICT",
        "GIT_SMART_LINT_AUTO_FIX",
        "GIT_SMART_LINT_DEFAULT_TYPE",
        "GIT_SMART_LINT_ALWAYS_LOG",
        "GIT_SMART_LINT_LOG_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)
