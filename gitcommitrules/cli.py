#!/usr/bin/env python3
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from .commit_message import CommitMessageGenerator, CommitMessageValidator
from .config import DEFAULT_CONFIG_FILENAME, Config
from .errors import CommitTypeInvalid, SubjectTooLong, ValidationError
from .models import CommitType
from .observers import ConsoleLogObserver, FileLogObserver

console = Console()
err_console = Console(stderr=True)


def print_hints(error: ValidationError) -> None:
    """Print follow-up guidance for errors that carry useful context."""
    if isinstance(error, SubjectTooLong):
        err_console.print(
            f"[yellow]Hint: shorten the summary to at most {error.budget} characters[/yellow]"
        )
    elif isinstance(error, CommitTypeInvalid):
        err_console.print(f"[yellow]Hint: allowed types are {error.allowed}[/yellow]")


def build_validator(config: Config, log_file: Optional[Path]) -> CommitMessageValidator:
    validator = CommitMessageValidator()
    validator.add_observer(ConsoleLogObserver(err_console))

    log_file_path = log_file or config.get_log_file()
    if log_file_path:
        validator.add_observer(FileLogObserver(str(log_file_path)))
    return validator


@click.group()
@click.option(
    "-p",
    "--path",
    default=".",
    help="Directory holding .gitcommitrules.toml (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.pass_context
def main(ctx: click.Context, path: Path):
    """
    Validate and compose Conventional Commit messages.

    Configuration can be set in .gitcommitrules.toml in the repository root.
    Command line options override configuration file settings.
    """
    ctx.meta["config_dir"] = path.absolute()
    ctx.obj = Config.load(ctx.meta["config_dir"])


@main.command()
@click.argument("message_file", type=click.File("r", encoding="utf-8"))
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log validation results (overrides config setting)",
)
@click.option("--no-hints", is_flag=True, help="Do not print hints after a failure")
@click.pass_obj
def check(config: Config, message_file, log_file: Optional[Path], no_hints: bool):
    """Validate the commit message in MESSAGE_FILE ('-' for stdin).

    Suitable as a commit-msg hook: exits non-zero when the message is invalid.
    """
    message = message_file.read()
    validator = build_validator(config, log_file)

    error = validator.check(message)
    if error is not None:
        if config.show_hints and not no_hints:
            print_hints(error)
        sys.exit(1)


@main.command()
@click.option(
    "-t",
    "--type",
    "commit_type",
    required=True,
    type=click.Choice([member.value for member in CommitType]),
    help="Commit type",
)
@click.option("-s", "--summary", required=True, help="Short summary for the subject line")
@click.option("--scope", help="Optional scope placed in parentheses after the type")
@click.option("-b", "--body", help="Optional body text")
@click.option("--breaking", help="Breaking change note; adds '!' and a BREAKING CHANGE footer")
@click.pass_obj
def compose(
    config: Config,
    commit_type: str,
    summary: str,
    scope: Optional[str],
    body: Optional[str],
    breaking: Optional[str],
):
    """Build a commit message from its parts and print it."""
    try:
        message = CommitMessageGenerator().generate(
            commit_type=commit_type,
            summary=summary,
            scope=scope,
            body=body,
            breaking_note=breaking,
        )
    except ValidationError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        if config.show_hints:
            print_hints(e)
        sys.exit(1)

    click.echo(message)


@main.command("config")
@click.option("--always-log/--no-always-log", default=None, help="Always write a timestamped log file")
@click.option("--log-file", help="Path to log file, relative to the repository")
@click.option("--log-directory", help="Directory for automatically named log files")
@click.option("--show-hints/--no-show-hints", default=None, help="Print hints after a failure")
@click.pass_context
def config_command(
    ctx: click.Context,
    always_log: Optional[bool],
    log_file: Optional[str],
    log_directory: Optional[str],
    show_hints: Optional[bool],
):
    """Show the current settings, or update and save the given ones."""
    config: Config = ctx.obj
    config_dir: Path = ctx.meta["config_dir"]
    config_path = config_dir / DEFAULT_CONFIG_FILENAME

    updates = {
        "always_log": always_log,
        "log_file": log_file,
        "log_directory": log_directory,
        "show_hints": show_hints,
    }
    updates = {name: value for name, value in updates.items() if value is not None}

    if updates:
        for name, value in updates.items():
            setattr(config, name, value)
        config.save(config_dir)
        console.print(f"[green]Saved settings to {escape(str(config_path))}[/green]")

    if config_path.exists():
        console.print(f"[dim]Config file: {escape(str(config_path))}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\n{'Setting':<20} {'Value':<20}")
    console.print("-" * 40)
    for name, value in config.model_dump().items():
        console.print(f"{name:<20} {escape(str(value)):<20}")


if __name__ == "__main__":
    main()
