import json
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable
from typing import Iterator
from typing import Mapping
from typing import NamedTuple

from rich.text import Text

from insta.output.styles import Style


class ComposeState:
    CREATED = 'created'
    RUNNING = 'running'
    RESTARTING = 'restarting'
    EXITED = 'exited'
    DEAD = 'dead'


class ComposeHealth:
    EMPTY = ''
    STARTING = 'starting'
    HEALTHY = 'healthy'
    UNHEALTHY = 'unhealthy'


@dataclass
class ServiceState:
    name: str
    state: str
    exit_code: int
    health: str
    status: str  # "Up X seconds"

    @classmethod
    def from_dict(cls, status: dict) -> 'ServiceState':
        return cls(
            name=status['Service'],
            state=status.get('State', ''),
            exit_code=int(status.get('ExitCode') or 0),
            health=status.get('Health') or ComposeHealth.EMPTY,
            status=status.get('Status', ''),
        )

    def is_running(self) -> bool:
        return self.state == ComposeState.RUNNING

    def is_completed(self) -> bool:
        return self.state == ComposeState.EXITED and self.exit_code == 0

    def is_failed(self) -> bool:
        return (self.state in (ComposeState.DEAD, ComposeState.RESTARTING)
                or (self.state == ComposeState.EXITED and self.exit_code != 0)
                or self.health == ComposeHealth.UNHEALTHY)

    def is_settled(self) -> bool:
        if self.is_completed() or self.is_failed():
            return True
        return self.is_running() and self.health in (ComposeHealth.EMPTY, ComposeHealth.HEALTHY)

    def as_rich_text(self, style: Style = Style()):
        service_string = Text('     ')
        service_string.append(Text(f"{self.name:{30}}", style=style.regular))

        match (self.state, self.exit_code):
            case (ComposeState.RUNNING, _):
                style_result = style.good
            case (ComposeState.EXITED, 0):
                style_result = style.suspicious
            case _:
                style_result = style.bad
        service_string.append(Text(
            f"{self.state:{20}}",
            style=style_result
        ))
        service_string.append(Text(
            f"{self.health:{20}}",
            style=style.good if self.health == ComposeHealth.HEALTHY else style.bad
        ))
        service_string.append(Text(
            self.status, style=style.regular
        ))
        service_string.append(Text('\n', style=style.regular))
        return service_string

    def as_json(self) -> dict:
        return {
            'name': self.name,
            'state': self.state,
            'exit_code': self.exit_code,
            'health': self.health,
            'status': self.status,
        }


class ServicesState:
    def __init__(self, services: list[ServiceState] = None):
        self._services: list[ServiceState] = list(services or [])

    @classmethod
    def from_compose_output(cls, compose_status: str) -> 'ServicesState':
        compose_status = compose_status.strip()
        if not compose_status:
            return cls()

        # older docker compose prints one json array, newer ones print json lines
        if compose_status.startswith('['):
            statuses = json.loads(compose_status)
        else:
            statuses = [
                json.loads(state_str)
                for state_str in compose_status.split('\n')
                if state_str.strip()
            ]
        return cls([ServiceState.from_dict(status) for status in statuses])

    def get(self, name: str) -> ServiceState | None:
        for service_state in self._services:
            if service_state.name == name:
                return service_state
        return None

    def names(self) -> list[str]:
        return [service_state.name for service_state in self._services]

    def __contains__(self, item):
        if isinstance(item, str):
            return item in self.names()
        return item in self._services

    def __iter__(self) -> Iterator[ServiceState]:
        return iter(self._services)

    def __len__(self) -> int:
        return len(self._services)

    def __eq__(self, other) -> bool:
        if isinstance(other, ServicesState):
            return (all(service_state in other for service_state in self._services)
                    and all(service_state in self for service_state in other))
        return False

    def __repr__(self):
        return f'{type(self).__name__}(<{self._services}>)'

    def as_rich_text(
        self,
        filter: Callable[[ServiceState], bool] = lambda x: True,
        style: Style = Style()
    ) -> Text:
        services_text = Text()
        for service_state in self._services:
            if filter(service_state):
                services_text.append(service_state.as_rich_text(style))
        return services_text

    def as_json(self, filter: Callable[[ServiceState], bool] = lambda x: True) -> list[dict]:
        return [service_state.as_json() for service_state in self._services if filter(service_state)]


class ServiceOutcome(Enum):
    STARTED = 'started'
    COMPLETED = 'completed'
    STOPPED = 'stopped'
    FAILED = 'failed'


class ServicesOutcome:
    def __init__(self, outcomes: Mapping[str, ServiceOutcome] = None, log: str = ''):
        self._outcomes: dict[str, ServiceOutcome] = dict(outcomes or {})
        self.log = log

    def __getitem__(self, item: str) -> ServiceOutcome:
        return self._outcomes[item]

    def __contains__(self, item) -> bool:
        return item in self._outcomes

    def __iter__(self) -> Iterator[str]:
        return iter(self._outcomes)

    def __len__(self) -> int:
        return len(self._outcomes)

    def __bool__(self) -> bool:
        return bool(self._outcomes)

    def __eq__(self, other) -> bool:
        if isinstance(other, ServicesOutcome):
            return self._outcomes == other._outcomes
        if isinstance(other, dict):
            return self._outcomes == other
        return False

    def __repr__(self):
        return f'{type(self).__name__}({self.as_json()})'

    def items(self):
        return self._outcomes.items()

    def succeeded(self) -> list[str]:
        return [name for name, outcome in self._outcomes.items() if outcome != ServiceOutcome.FAILED]

    def failed(self) -> list[str]:
        return [name for name, outcome in self._outcomes.items() if outcome == ServiceOutcome.FAILED]

    def is_ok(self) -> bool:
        return not self.failed()

    def as_json(self) -> dict[str, str]:
        return {name: outcome.value for name, outcome in self._outcomes.items()}

    def as_rich_text(self, style: Style = Style()) -> Text:
        outcomes_text = Text()
        for name, outcome in self._outcomes.items():
            outcomes_text.append(Text('     '))
            outcomes_text.append(Text(f'{name:{30}}', style=style.regular))
            outcomes_text.append(Text(
                outcome.value,
                style=style.bad if outcome == ServiceOutcome.FAILED else style.good
            ))
            outcomes_text.append(Text('\n', style=style.regular))
        return outcomes_text


class ExecOptions(NamedTuple):
    working_dir: str | None = None
    tty: bool = True
    env: Mapping[str, str] = MappingProxyType({})


class ExecResult(NamedTuple):
    service: str
    command: str
    exit_code: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


def start_outcome(state: ServicesState, services: list[str], log: str = '') -> ServicesOutcome:
    outcomes = {}
    for name in services:
        service_state = state.get(name)
        if service_state is None or service_state.is_failed():
            outcomes[name] = ServiceOutcome.FAILED
        elif service_state.is_completed():
            outcomes[name] = ServiceOutcome.COMPLETED
        elif service_state.is_running():
            outcomes[name] = ServiceOutcome.STARTED
        else:
            outcomes[name] = ServiceOutcome.FAILED
    return ServicesOutcome(outcomes, log)


def stop_outcome(state: ServicesState, services: list[str], log: str = '') -> ServicesOutcome:
    return ServicesOutcome({
        name: ServiceOutcome.FAILED if name in state else ServiceOutcome.STOPPED
        for name in services
    }, log)
