#!/usr/bin/env python3
import sys
from pathlib import Path
from typing import List, Optional

import click
import pyperclip
from rich.console import Console

from .config import DEFAULT_CONFIG_FILENAME, Config
from .models import VALID_TYPES, ChoiceKind, CommitType, Severity
from .observers import ConsoleLogObserver, FileLogObserver, LintObserver
from .render import render_choice_prompt, render_fixed_message, render_issues
from .session import LintSession

console = Console()


def read_message(message: Optional[str], message_file: Optional[Path]) -> str:
    """Get the commit message from the option, a file, or stdin."""
    if message is not None:
        return message
    if message_file is None:
        raise click.UsageError("Provide a MESSAGE_FILE, '-' for stdin, or --message")
    if str(message_file) == "-":
        return click.get_text_stream("stdin").read()
    return message_file.read_text(encoding="utf-8")


def is_failing(session: LintSession, strict: bool) -> bool:
    if strict:
        return bool(session.issues)
    return any(issue.severity == Severity.ERROR for issue in session.issues)


def prompt_for_choices(session: LintSession) -> LintSession:
    """Ask the user for every choice the current issues need."""
    for kind in session.required_choices:
        render_choice_prompt(console, kind, session.user_choices.get(kind))
        if kind == ChoiceKind.TYPE:
            value = click.prompt(
                "Commit type", type=click.Choice(list(VALID_TYPES)), show_choices=False
            )
            session = session.with_choice(kind, CommitType(value))
    return session


def print_settings(config: Config, config_path: Path) -> None:
    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path.exists():
        console.print(f"[dim]Config file: {config_path.as_posix()}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    source = "config" if config_path.exists() else "default"
    console.print(f"\n{'Setting':<20} {'Value':<20} {'Source':<10}")
    console.print("-" * 50)
    for name in Config.model_fields:
        value = getattr(config, name)
        if isinstance(value, CommitType):
            value = value.value
        console.print(f"{name:<20} {str(value):<20} {source:<10}")

    console.print(
        f"\nTo modify these settings, create or edit {DEFAULT_CONFIG_FILENAME} in the working directory"
    )


@click.command()
@click.argument(
    "message_file",
    required=False,
    type=click.Path(dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option("-m", "--message", help="Commit message to lint instead of reading a file")
@click.option("--fix", is_flag=True, help="Apply all available fixes")
@click.option(
    "-w",
    "--write",
    is_flag=True,
    help="Apply all available fixes and write the result back to MESSAGE_FILE",
)
@click.option(
    "-t",
    "--type",
    "commit_type",
    type=click.Choice(list(VALID_TYPES)),
    help="Commit type to use when a fix needs one (overrides config setting)",
)
@click.option(
    "-i", "--interactive", is_flag=True, help="Prompt for choices that fixes need"
)
@click.option("--copy", is_flag=True, help="Copy the fixed message to the clipboard")
@click.option("--strict", is_flag=True, help="Fail on warnings as well as errors")
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log lint results (overrides config setting)",
)
@click.option(
    "-p",
    "--path",
    default=".",
    help="Directory holding the config file (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "--config-list", is_flag=True, help="Display current configuration settings"
)
@click.option(
    "--config-dir",
    "show_config_dir",
    is_flag=True,
    help="Display the config file location and copy it to clipboard",
)
@click.option("--version", is_flag=True, help="Display version information and exit")
def main(
    message_file: Optional[Path],
    message: Optional[str],
    fix: bool,
    write: bool,
    commit_type: Optional[str],
    interactive: bool,
    copy: bool,
    strict: bool,
    log_file: Optional[Path],
    path: Path,
    config_list: bool,
    show_config_dir: bool,
    version: bool,
):
    """
    Lint a commit message against the conventional commit format.

    MESSAGE_FILE can be the file git passes to a commit-msg hook, or '-'
    to read from stdin. Exits with status 1 when errors remain.

    Configuration can be set in .gitsmartlint.toml in the working directory.
    Command line options override configuration file settings.
    """
    try:
        if version:
            from .version import display_version_info

            display_version_info(console)
            return

        config_dir = path.absolute()
        config = Config.load(config_dir)

        if config_list:
            print_settings(config, config_dir / DEFAULT_CONFIG_FILENAME)
            return

        if show_config_dir:
            config_path = config_dir / DEFAULT_CONFIG_FILENAME
            config_path_str = str(config_path)
            if not config_path.exists():
                Config().save(config_dir)
                console.print("[yellow]Created new config file with default values[/yellow]")
            pyperclip.copy(config_path_str)
            console.print(f"[green]Config file location:[/green] {config_path_str}")
            console.print("[green]Path copied to clipboard![/green]")
            return

        # Command line options override config
        if strict:
            config.strict = True
        if commit_type is not None:
            config.default_type = CommitType(commit_type)
        if log_file is not None:
            config.log_file = str(log_file)

        observers: List[LintObserver] = [ConsoleLogObserver(console)]
        log_file_path = log_file or config.get_log_file()
        if log_file_path:
            observers.append(FileLogObserver(str(log_file_path)))

        text = read_message(message, message_file)
        session = LintSession().update_from_input(text)
        for observer in observers:
            observer.on_lint_completed(session.current_text, session.issues)
        render_issues(console, session.issues)

        if fix or write or config.auto_fix:
            if config.default_type is not None:
                session = session.with_choice(ChoiceKind.TYPE, config.default_type)
            if interactive and not session.has_all_required_choices():
                session = prompt_for_choices(session)
            if not session.has_all_required_choices():
                console.print(
                    "[yellow]Some fixes need a commit type. Use --type or --interactive to apply them.[/yellow]"
                )

            before = session.current_text
            session = session.apply_all()
            for observer in observers:
                observer.on_fix_applied(before, session.fixed_text)

            render_fixed_message(console, session.fixed_text)
            console.print("\n[bold]After fixing:[/bold]")
            render_issues(console, session.issues)

            if write:
                if message_file is None or str(message_file) == "-":
                    click.echo(session.fixed_text)
                else:
                    message_file.write_text(session.fixed_text + "\n", encoding="utf-8")
                    console.print(f"[green]Wrote fixed message to {message_file}[/green]")

            if copy:
                try:
                    pyperclip.copy(session.fixed_text)
                    console.print("[green]Fixed message copied to clipboard![/green]")
                except pyperclip.PyperclipException as e:
                    console.print(f"[yellow]Warning: Could not copy to clipboard: {e}[/yellow]")

        if is_failing(session, config.strict):
            sys.exit(1)
    except click.ClickException:
        raise
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
    except Exception as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        raise click.Abort()


if __name__ == "__main__":
    main()
