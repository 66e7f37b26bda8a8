import asyncio
from types import MappingProxyType
from typing import Mapping
from typing import NamedTuple

from rich.text import Text

from insta.backend.backend_types import ExecOptions
from insta.backend.backend_types import ExecResult
from insta.backend.interface import ContainerBackend
from insta.errors import ServiceNotFoundError
from insta.errors import ServiceNotRunningError
from insta.helpers.cancellation import wait_cancellable
from insta.output.console import ERR_CONSOLE
from insta.output.styles import Style
from insta.topology.project_types import Project

DEFAULT_COMMAND = 'sh'


class SessionRequest(NamedTuple):
    service: str
    command: str = DEFAULT_COMMAND
    working_dir: str | None = None
    tty: bool = True
    env: Mapping[str, str] = MappingProxyType({})

    def exec_options(self) -> ExecOptions:
        return ExecOptions(working_dir=self.working_dir, tty=self.tty, env=self.env)


class SessionBridge:
    """
    Runs one command inside a running service container with the caller's terminal attached.

    Each attach opens exactly one backend exec and releases it whatever way the
    command ends. Services are never started implicitly.
    """

    def __init__(self, backend: ContainerBackend):
        self._backend = backend

    async def attach(self, project: Project, request: SessionRequest,
                     cancel: asyncio.Event | None = None) -> ExecResult:
        if request.service not in project:
            raise ServiceNotFoundError([request.service], project.name)

        state = await wait_cancellable(self._backend.state(project), cancel, 'connect', [request.service])
        service_state = state.get(request.service)
        if service_state is None or not service_state.is_running():
            raise ServiceNotRunningError(
                request.service, project.name, service_state.state if service_state else None
            )

        ERR_CONSOLE.print(
            Text('Connecting to ', style=Style.info)
            .append(Text(request.service, style=Style.mark))
            .append(Text(f': {request.command}', style=Style.regular))
        )
        async with self._backend.exec_session(
            project, request.service, request.command, request.exec_options()
        ) as session:
            exit_code = await wait_cancellable(session.wait(), cancel, 'connect', [request.service])

        return ExecResult(service=request.service, command=request.command, exit_code=exit_code)
