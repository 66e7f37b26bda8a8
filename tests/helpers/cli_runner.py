import asyncio

from click.testing import CliRunner
from click.testing import Result

from insta.cli.main import cli


async def invoke_cli(service, *args: str) -> Result:
    # the cli runs its own event loop, so it is kept off the scenario loop
    return await asyncio.to_thread(CliRunner().invoke, cli, list(args), obj=service)
