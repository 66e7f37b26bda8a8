import re
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from rich.text import Text

from insta.backend.backend_types import ExecOptions
from insta.backend.backend_types import ServicesOutcome
from insta.backend.backend_types import ServicesState
from insta.backend.backend_types import start_outcome
from insta.backend.backend_types import stop_outcome
from insta.backend.compose_interface import ComposeShellInterface
from insta.backend.interface import ContainerBackend
from insta.backend.interface import ExecSession
from insta.backend.process_output import terminate_process
from insta.config import Config
from insta.errors import BackendUnavailableError
from insta.errors import InstaError
from insta.errors import ServiceNotFoundError
from insta.helpers.jobs_result import JobResult
from insta.helpers.jobs_result import OperationError
from insta.output.console import CONSOLE
from insta.output.styles import Style

COMPOSE_FILE_NAME = 'docker-compose.yaml'
COMMAND_NOT_FOUND_CODE = 127

BACKEND_UNAVAILABLE_MARKERS = (
    'cannot connect to the docker daemon',
    'error during connect',
    'is the docker daemon running',
    'connection refused',
    'context not found',
    "is not a docker command",
)
NO_SUCH_SERVICE_RE = re.compile(r'no such service:?\s*"?([a-zA-Z0-9_.-]+)"?', re.IGNORECASE)


def classify_failure(error: OperationError, project_name: str) -> InstaError | None:
    stderr = error.stderr.decode('utf-8', errors='replace')

    if error.returncode == COMMAND_NOT_FOUND_CODE:
        return BackendUnavailableError(f"Can't run docker compose: {error.cmd}", error.log)

    lowered = stderr.lower()
    if any(marker in lowered for marker in BACKEND_UNAVAILABLE_MARKERS):
        return BackendUnavailableError(f'Docker backend is unreachable:\n{stderr.strip()}', error.log)

    if missing := NO_SUCH_SERVICE_RE.findall(stderr):
        return ServiceNotFoundError(list(dict.fromkeys(missing)), project_name)

    return None


class ComposeExecSession(ExecSession):
    def __init__(self, process):
        self._process = process

    @property
    def returncode(self) -> int | None:
        return self._process.returncode

    async def wait(self) -> int:
        return await self._process.wait()

    async def close(self) -> None:
        await terminate_process(self._process)


class ComposeBackend(ContainerBackend):
    def __init__(self, config: Config = None, compose_interface: type[ComposeShellInterface] = None):
        if config is None:
            config = Config()
        self._config = config
        self._compose_interface = ComposeShellInterface
        if compose_interface is not None:
            self._compose_interface = compose_interface

    def materialize(self, project) -> Path:
        project_path = self._config.projects_path / project.name
        project_path.mkdir(parents=True, exist_ok=True)

        compose_file = project_path / COMPOSE_FILE_NAME
        if not compose_file.exists() or compose_file.read_text() != project.source:
            compose_file.write_text(project.source)
        return compose_file

    def _interface(self, project) -> ComposeShellInterface:
        return self._compose_interface(
            project_name=project.name,
            compose_file=self.materialize(project),
            project_directory=project.working_dir,
            config=self._config,
        )

    async def state(self, project) -> ServicesState:
        state_result = await self._interface(project).dc_state()
        if isinstance(state_result, OperationError):
            raise classify_failure(state_result, project.name) or BackendUnavailableError(
                f"Can't get services state of {project.name}", state_result.log
            )
        return state_result

    async def start(self, project, services: list[str]) -> ServicesOutcome:
        up_result = await self._interface(project).dc_up(services)

        log = ''
        if up_result != JobResult.GOOD:
            if error := classify_failure(up_result, project.name):
                raise error
            log = up_result.log
            CONSOLE.print(Text(f"Can't up {services} successfully", style=Style.bad))

        return start_outcome(await self.state(project), services, log)

    async def stop(self, project, services: list[str]) -> ServicesOutcome:
        # whole project goes down with its networks, a subset only with its containers
        whole_project = set(services) >= set(project.names())
        down_result = await self._interface(project).dc_down([] if whole_project else services)

        log = ''
        if down_result != JobResult.GOOD:
            if error := classify_failure(down_result, project.name):
                raise error
            log = down_result.log
            CONSOLE.print(Text(f"Can't down {services} successfully", style=Style.bad))

        return stop_outcome(await self.state(project), services, log)

    @asynccontextmanager
    async def exec_session(self, project, service: str, command: str,
                           options: ExecOptions) -> AsyncIterator[ComposeExecSession]:
        process = await self._interface(project).dc_exec_process(
            service,
            command,
            working_dir=options.working_dir,
            tty=options.tty,
            env=dict(options.env),
        )
        session = ComposeExecSession(process)
        try:
            yield session
        finally:
            await session.close()
