"""gitcmd command-line interface."""

import shlex
from typing import Any

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gitcmd import __version__
from gitcmd.commands import COMMANDS, get_command
from gitcmd.commands.entries import Option
from gitcmd.config import GitCmdConfig
from gitcmd.exceptions import CommandLineError, GitCmdError
from gitcmd.execution_context import ExecutionContext
from gitcmd.logging import get_logger, set_context, setup_logging_from_config

console = Console()
err_console = Console(stderr=True)
logger = get_logger("cli")


def parse_option_values(
    sets: tuple[str, ...], flags: tuple[str, ...], negations: tuple[str, ...]
) -> dict[str, Any]:
    """Collect keyword values from ``--set``, ``--flag`` and ``--no``.

    Args:
        sets: ``key=value`` strings; a key given more than once becomes a list
        flags: Keys set to True
        negations: Keys set to False

    Returns:
        Keyword arguments for a command call

    Raises:
        click.BadParameter: If a ``--set`` value has no ``=``
    """
    values: dict[str, Any] = {}
    for item in sets:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {item!r}", param_hint="--set")
        if key in values:
            existing = values[key]
            values[key] = [*existing, value] if isinstance(existing, list) else [existing, value]
        else:
            values[key] = value
    for key in flags:
        values[key] = True
    for key in negations:
        values[key] = False
    return values


def _lookup(name: str) -> Any:
    try:
        return get_command(name)
    except KeyError as e:
        raise click.BadParameter(e.args[0], param_hint="NAME") from None


def _usage(command_type: Any) -> str:
    return " ".join(entry.describe() for entry in command_type.spec().entries)


call_options = [
    click.option("--set", "sets", multiple=True, metavar="KEY=VALUE", help="Option value (repeat for lists)"),
    click.option("--flag", "flags", multiple=True, metavar="KEY", help="Set an option to True"),
    click.option("--no", "negations", multiple=True, metavar="KEY", help="Set an option to False"),
]


def with_call_options(func: Any) -> Any:
    for option in reversed(call_options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="gitcmd")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None, help="Config file path")
@click.option("--verbose", "-v", is_flag=True, help="Log at debug level")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """gitcmd - declarative git command wrappers.

    Inspect the registered git commands, preview the argv a call binds to,
    or run a command against a repository.
    """
    ctx.ensure_object(dict)
    try:
        config = GitCmdConfig.load(config_path)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] invalid configuration: {escape(str(e))}")
        raise SystemExit(1) from e

    if verbose:
        config.logging.level = "debug"
    setup_logging_from_config(config.logging)
    ctx.obj["config"] = config


@cli.command("commands")
def list_commands() -> None:
    """List registered commands."""
    table = Table(show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Usage")
    table.add_column("Exit status", justify="right")

    for name, command_type in sorted(COMMANDS.items()):
        statuses = command_type.allowed_exit_status
        table.add_row(name, _usage(command_type), f"{statuses.start}..{statuses.stop - 1}")

    console.print(table)


@cli.command()
@click.argument("name")
def describe(name: str) -> None:
    """Show the argument specification of command NAME."""
    command_type = _lookup(name)
    arguments = command_type.spec()

    console.print(f"[bold]{name}[/bold]: {_usage(command_type)}")

    table = Table(show_header=True)
    table.add_column("Kind", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Aliases")
    table.add_column("Renders")
    table.add_column("Required", justify="center")

    for entry in arguments.entries:
        aliases = ", ".join(entry.aliases) if isinstance(entry, Option) else ""
        required = "yes" if getattr(entry, "required", False) else ""
        table.add_row(entry.kind, entry.name or "", aliases, entry.describe(), required)

    console.print(table)

    for constraint in arguments.constraints:
        console.print(f"  [yellow]constraint[/yellow] {constraint.describe()}")


@cli.command()
@click.argument("name")
@click.argument("args", nargs=-1)
@with_call_options
def argv(name: str, args: tuple[str, ...], sets: tuple[str, ...], flags: tuple[str, ...], negations: tuple[str, ...]) -> None:
    """Print the git arguments a call to NAME binds to, without running git."""
    command_type = _lookup(name)
    try:
        bound = command_type.spec().bind(*args, **parse_option_values(sets, flags, negations))
    except GitCmdError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    click.echo(shlex.join(bound.tokens))


@cli.command()
@click.argument("name")
@click.argument("args", nargs=-1)
@with_call_options
@click.option("--repo", type=click.Path(file_okay=False), default=None, help="Repository to run in")
@click.option("--timeout", type=float, default=None, help="Seconds before git is killed")
@click.pass_context
def run(
    ctx: click.Context,
    name: str,
    args: tuple[str, ...],
    sets: tuple[str, ...],
    flags: tuple[str, ...],
    negations: tuple[str, ...],
    repo: str | None,
    timeout: float | None,
) -> None:
    """Run command NAME and print git's output.

    Exits with git's exit status, which is non-zero for accepted statuses
    such as ``diff`` reporting differences.
    """
    command_type = _lookup(name)
    config: GitCmdConfig = ctx.obj["config"]
    logger.debug(f"Running {name} in {repo or 'current directory'}")
    if timeout is not None:
        config = config.model_copy(update={"timeout": timeout})

    try:
        if repo is not None:
            context = ExecutionContext.for_repository(repo, config=config)
            set_context(repo=str(context.work_tree))
        else:
            context = ExecutionContext(config=config)
        result = command_type(context).call(*args, **parse_option_values(sets, flags, negations))
    except CommandLineError as e:
        if e.stderr:
            err_console.print(e.stderr, markup=False, highlight=False)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(e.exit_status or 1) from e
    except GitCmdError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    if result.stdout:
        click.echo(result.stdout)
    if result.stderr:
        click.echo(result.stderr, err=True)
    raise SystemExit(result.status.exitstatus or 0)


if __name__ == "__main__":
    cli()
