"""
Capabilities the orchestration core needs from a container backend.

Backends are passed into LifecycleOrchestrator and SessionBridge explicitly;
ComposeBackend is the docker compose one, tests use an in-memory one.
"""
from contextlib import AbstractAsyncContextManager

from insta.backend.backend_types import ExecOptions
from insta.backend.backend_types import ServicesOutcome
from insta.backend.backend_types import ServicesState
from insta.topology.project_types import Project


class ExecSession:
    """One interactive command running inside a service container."""

    async def wait(self) -> int:
        raise NotImplementedError()

    async def close(self) -> None:
        raise NotImplementedError()


class ContainerBackend:
    async def state(self, project: Project) -> ServicesState:
        """Containers of the project namespace as the backend sees them now."""
        raise NotImplementedError()

    async def start(self, project: Project, services: list[str]) -> ServicesOutcome:
        """Creates and starts `services` in one call, declared networks and volumes included."""
        raise NotImplementedError()

    async def stop(self, project: Project, services: list[str]) -> ServicesOutcome:
        """Stops and removes containers of `services` in one call."""
        raise NotImplementedError()

    def exec_session(self, project: Project, service: str, command: str,
                     options: ExecOptions) -> AbstractAsyncContextManager[ExecSession]:
        raise NotImplementedError()
