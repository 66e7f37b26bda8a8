import asyncio
from pathlib import Path
from typing import Iterable

from rich.text import Text

from insta.backend.backend_types import ExecResult
from insta.backend.backend_types import ServicesOutcome
from insta.backend.backend_types import ServicesState
from insta.backend.compose_backend import ComposeBackend
from insta.backend.interface import ContainerBackend
from insta.config import Config
from insta.core.orchestrator import LifecycleOrchestrator
from insta.core.orchestrator import LifecycleRequest
from insta.core.orchestrator import Operation
from insta.core.session import SessionBridge
from insta.core.session import SessionRequest
from insta.errors import TopologyFetchError
from insta.helpers.cancellation import wait_cancellable
from insta.output.console import CONSOLE
from insta.output.logger import WaitVerbosity
from insta.output.styles import Style
from insta.topology.classifier import ServiceRole
from insta.topology.classifier import classify
from insta.topology.classifier import primary_services
from insta.topology.loader import load_default_project
from insta.topology.project_types import Project
from insta.topology.remote import update_topology


class InstaService:
    def __init__(self,
                 config: Config = None,
                 backend: ContainerBackend = None,
                 project: Project = None):
        if config is None:
            config = Config()
        self._config = config

        self._backend = backend
        if self._backend is None:
            self._backend = ComposeBackend(config)

        self._project = project
        self._orchestrator = LifecycleOrchestrator(self._backend, config)
        self._session_bridge = SessionBridge(self._backend)

    @property
    def project(self) -> Project:
        if self._project is None:
            self._project = load_default_project(self._config)
        return self._project

    def classify(self) -> dict[str, ServiceRole]:
        return classify(self.project, self._config.auxiliary_suffixes)

    def services(self, include_auxiliary: bool = False) -> list[str]:
        if include_auxiliary:
            return self.project.names()
        return primary_services(self.project, self._config.auxiliary_suffixes)

    async def up(self, services: Iterable[str] = (), cancel: asyncio.Event | None = None,
                 verbose: WaitVerbosity | None = None) -> ServicesOutcome:
        return await self._orchestrator.execute(
            self.project, LifecycleRequest.make(Operation.UP, services), cancel, verbose
        )

    async def down(self, services: Iterable[str] = (), cancel: asyncio.Event | None = None) -> ServicesOutcome:
        return await self._orchestrator.execute(
            self.project, LifecycleRequest.make(Operation.DOWN, services), cancel
        )

    async def connect(self, request: SessionRequest, cancel: asyncio.Event | None = None) -> ExecResult:
        return await self._session_bridge.attach(self.project, request, cancel)

    async def status(self, cancel: asyncio.Event | None = None) -> ServicesState:
        services_state = await wait_cancellable(self._backend.state(self.project), cancel, 'status')
        CONSOLE.print(Text(f'Services status of {self.project.name}:', style=Style.info))
        CONSOLE.print(services_state.as_rich_text())
        return services_state

    async def update(self, url: str | None = None, cancel: asyncio.Event | None = None) -> Path:
        url = url or self._config.topology_url
        if not url:
            raise TopologyFetchError('No topology url given; pass one or set INSTA_TOPOLOGY_URL')
        return await wait_cancellable(update_topology(url, self._config.topology_override_path), cancel, 'update')
