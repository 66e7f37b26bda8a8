import asyncio
import signal
import sys
from contextlib import contextmanager
from typing import Awaitable
from typing import Callable

import click
from rich.text import Text

from insta.core.service import InstaService
from insta.core.session import DEFAULT_COMMAND
from insta.core.session import SessionRequest
from insta.errors import BackendUnavailableError
from insta.errors import CancelledError
from insta.errors import InstaError
from insta.errors import PartialFailureError
from insta.output.console import CONSOLE
from insta.output.console import ERR_CONSOLE
from insta.output.logger import WaitVerbosity
from insta.output.styles import Style
from insta.topology.classifier import ServiceRole
from insta.version import get_version

ALIASES = {
    'c': 'connect',
    'd': 'down',
    'u': 'update',
    'ls': 'services',
    'ps': 'status',
}

EXIT_ERROR = 1
EXIT_CANCELLED = 130


class AliasedGroup(click.Group):
    def get_command(self, ctx, cmd_name):
        return super().get_command(ctx, ALIASES.get(cmd_name, cmd_name))

    def resolve_command(self, ctx, args):
        _, cmd, args = super().resolve_command(ctx, args)
        return cmd.name if cmd else None, cmd, args


def report_error(error: InstaError) -> None:
    ERR_CONSOLE.print(
        Text(f'✗ {error.kind}: ', style=Style.bad)
        .append(Text(error.message, style=Style.regular))
    )
    if isinstance(error, PartialFailureError):
        ERR_CONSOLE.print(error.outcomes.as_rich_text())
    if isinstance(error, (PartialFailureError, BackendUnavailableError)) and error.log:
        ERR_CONSOLE.print(Text(error.log, style=Style.context))


@contextmanager
def reported_errors():
    try:
        yield
    except CancelledError as e:
        report_error(e)
        sys.exit(EXIT_CANCELLED)
    except InstaError as e:
        report_error(e)
        sys.exit(EXIT_ERROR)


def run(operation: Callable[[asyncio.Event], Awaitable]):
    async def main():
        cancel = asyncio.Event()
        loop = asyncio.get_running_loop()
        handled_signals = []
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, cancel.set)
                handled_signals.append(sig)
            except (NotImplementedError, RuntimeError):
                ...
        try:
            return await operation(cancel)
        finally:
            for sig in handled_signals:
                loop.remove_signal_handler(sig)

    with reported_errors():
        return asyncio.run(main())


def parse_env(ctx, param, values: tuple[str, ...]) -> dict[str, str]:
    env = {}
    for value in values:
        key, sep, val = value.partition('=')
        if not key or not sep:
            raise click.BadParameter(f'expected KEY=VALUE, got {value!r}', ctx=ctx, param=param)
        env[key] = val
    return env


@click.group(cls=AliasedGroup, invoke_without_command=True)
@click.version_option(get_version(), prog_name='insta')
@click.pass_context
def cli(ctx):
    """
    Brings bundled development services up and down and runs commands inside them.

    Without a command all services are brought up.
    """
    if ctx.obj is None:
        ctx.obj = InstaService()
    if ctx.invoked_subcommand is None:
        ctx.invoke(up)


@cli.command()
@click.option('--verbose', '-v', is_flag=True, help='Show services state on every readiness check')
@click.option('--quiet', '-q', is_flag=True, help='Report readiness only when it fails')
@click.argument('services', nargs=-1)
@click.pass_obj
def up(service: InstaService, verbose, quiet, services):
    """Run services (all when none given)."""
    verbosity = None
    if verbose:
        verbosity = WaitVerbosity.FULL
    elif quiet:
        verbosity = WaitVerbosity.QUIET
    run(lambda cancel: service.up(services, cancel, verbosity))


@cli.command()
@click.argument('services', nargs=-1)
@click.pass_obj
def down(service: InstaService, services):
    """Bring services down (all when none given)."""
    run(lambda cancel: service.down(services, cancel))


@cli.command(context_settings={'ignore_unknown_options': True, 'allow_interspersed_args': False})
@click.option('--workdir', '-w', default=None, help='Working directory inside the container')
@click.option('--tty/--no-tty', default=None, help='Attach a terminal (default: when stdin is a terminal)')
@click.option('--env', '-e', multiple=True, callback=parse_env, help='KEY=VALUE set for the command')
@click.argument('service_name', required=False)
@click.argument('command', nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def connect(service: InstaService, workdir, tty, env, service_name, command):
    """Connect to a service and run COMMAND in it (a shell by default)."""
    with reported_errors():
        if service_name is None:
            service_name = click.prompt(
                'Service',
                type=click.Choice(service.services()),
                show_choices=True,
            )

    request = SessionRequest(
        service=service_name,
        command=' '.join(command) if command else DEFAULT_COMMAND,
        working_dir=workdir,
        tty=sys.stdin.isatty() if tty is None else tty,
        env=env,
    )
    result = run(lambda cancel: service.connect(request, cancel))
    sys.exit(result.exit_code)


@cli.command()
@click.option('--all', 'show_all', is_flag=True, help='Also list data, init and server units')
@click.pass_obj
def services(service: InstaService, show_all):
    """List services."""
    with reported_errors():
        roles = service.classify()
        for name in service.services(include_auxiliary=show_all):
            style = Style.regular if roles[name] == ServiceRole.PRIMARY else Style.context
            CONSOLE.print(Text(name, style=style))


@cli.command()
@click.pass_obj
def status(service: InstaService):
    """Show services state."""
    run(lambda cancel: service.status(cancel))


@cli.command()
@click.argument('url', required=False)
@click.pass_obj
def update(service: InstaService, url):
    """Update to the latest services topology (from URL or INSTA_TOPOLOGY_URL)."""
    run(lambda cancel: service.update(url, cancel))


def main():
    cli(obj=None)


if __name__ == '__main__':
    main()
