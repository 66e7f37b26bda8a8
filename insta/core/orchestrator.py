"""
Lifecycle orchestration of project services.

Every operation is a fresh reconciliation against the backend:
    - targets are resolved from the project (nothing is sent for unknown names)
    - one batched backend call addresses all targets, dependency ordering is left to the backend
    - the outcome is derived from the state the backend reports afterwards

No operation is retried; a half-applied up or down is reported as PartialFailureError.
"""
import asyncio
from enum import Enum
from functools import partial
from typing import Iterable
from typing import NamedTuple

from rich.text import Text

from insta.backend.backend_types import ServiceOutcome
from insta.backend.backend_types import ServicesOutcome
from insta.backend.backend_types import ServicesState
from insta.backend.interface import ContainerBackend
from insta.config import Config
from insta.core.state_waiting import wait_all_services_settled
from insta.errors import PartialFailureError
from insta.helpers.cancellation import wait_cancellable
from insta.output.console import CONSOLE
from insta.output.logger import WaitVerbosity
from insta.output.styles import Style
from insta.topology.project_types import Project


class Operation(Enum):
    UP = 'up'
    DOWN = 'down'


class LifecycleRequest(NamedTuple):
    operation: Operation
    target_services: frozenset[str] = frozenset()

    @classmethod
    def make(cls, operation: Operation, services: Iterable[str] = ()) -> 'LifecycleRequest':
        return cls(operation, frozenset(services))


def settle_outcome(outcome: ServicesOutcome, state: ServicesState) -> ServicesOutcome:
    settled = {}
    for name, service_outcome in outcome.items():
        if service_outcome != ServiceOutcome.STARTED:
            settled[name] = service_outcome
            continue

        service_state = state.get(name)
        if service_state is None or service_state.is_failed() or not service_state.is_settled():
            settled[name] = ServiceOutcome.FAILED
        elif service_state.is_completed():
            settled[name] = ServiceOutcome.COMPLETED
        else:
            settled[name] = ServiceOutcome.STARTED
    return ServicesOutcome(settled, outcome.log)


class LifecycleOrchestrator:
    def __init__(self, backend: ContainerBackend, config: Config = None, verbose: WaitVerbosity = WaitVerbosity.COMPACT):
        if config is None:
            config = Config()
        self._backend = backend
        self._wait_services = wait_all_services_settled(
            attempts=config.service_up_check_attempts,
            delay_s=config.service_up_check_delay,
        )
        self._verbose = verbose

    async def execute(self, project: Project, request: LifecycleRequest,
                      cancel: asyncio.Event | None = None,
                      verbose: WaitVerbosity | None = None) -> ServicesOutcome:
        match request.operation:
            case Operation.UP:
                return await self.up(project, request.target_services, cancel, verbose)
            case Operation.DOWN:
                return await self.down(project, request.target_services, cancel)
        raise ValueError(f'Unknown operation: {request.operation}')

    async def up(self, project: Project, services: Iterable[str] = (),
                 cancel: asyncio.Event | None = None,
                 verbose: WaitVerbosity | None = None) -> ServicesOutcome:
        targets = project.resolve(services)
        if not targets:
            CONSOLE.print(Text(f'No services declared in {project.name}', style=Style.suspicious))
            return ServicesOutcome()

        CONSOLE.print(
            Text('Starting services: ', style=Style.info)
            .append(Text(', '.join(targets), style=Style.good))
        )
        outcome = await wait_cancellable(self._backend.start(project, targets), cancel, 'up', targets)

        started = [name for name, service_outcome in outcome.items() if service_outcome == ServiceOutcome.STARTED]
        if started:
            checker = self._wait_services.make_checker()
            await wait_cancellable(
                checker(
                    get_services_state=partial(self._backend.state, project),
                    services=started,
                    verbose=verbose or self._verbose,
                ),
                cancel, 'up', targets
            )
            state = await wait_cancellable(self._backend.state(project), cancel, 'up', targets)
            outcome = settle_outcome(outcome, state)

        if not outcome.is_ok():
            raise PartialFailureError('up', outcome, outcome.log)

        CONSOLE.print(Text('Services up:', style=Style.info))
        CONSOLE.print(outcome.as_rich_text())
        return outcome

    async def down(self, project: Project, services: Iterable[str] = (),
                   cancel: asyncio.Event | None = None) -> ServicesOutcome:
        services = list(services)
        targets = project.resolve(services)

        state = await wait_cancellable(self._backend.state(project), cancel, 'down', targets)
        present = [name for name in targets if name in state]
        if not present:
            CONSOLE.print(Text(f'Nothing to stop in {project.name}', style=Style.info))
            return ServicesOutcome()

        CONSOLE.print(
            Text('Stopping services: ', style=Style.info)
            .append(Text(', '.join(present), style=Style.mark))
        )
        # whole project requests go to the backend as such, so it can drop project networks
        batch = targets if not services else present
        backend_outcome = await wait_cancellable(self._backend.stop(project, batch), cancel, 'down', present)
        outcome = ServicesOutcome(
            {name: backend_outcome[name] for name in present if name in backend_outcome},
            backend_outcome.log,
        )

        if not outcome.is_ok():
            raise PartialFailureError('down', outcome, outcome.log)

        CONSOLE.print(Text('Services down:', style=Style.info))
        CONSOLE.print(outcome.as_rich_text())
        return outcome
