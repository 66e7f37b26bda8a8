from pathlib import Path
from types import MappingProxyType
from typing import Iterable
from typing import Iterator
from typing import Mapping
from typing import NamedTuple

from insta.errors import ServiceNotFoundError


class ServiceDefinition(NamedTuple):
    name: str
    image: str | None = None
    build: str | Mapping | None = None
    command: tuple[str, ...] | None = None
    working_dir: str | None = None
    environment: Mapping[str, str] = MappingProxyType({})
    depends_on: tuple[str, ...] = ()
    restart: str | None = None

    def as_dict(self) -> dict:
        return {
            'name': self.name,
            'image': self.image,
            'command': list(self.command) if self.command is not None else None,
            'working_dir': self.working_dir,
            'environment': dict(self.environment),
            'depends_on': list(self.depends_on),
            'restart': self.restart,
        }


class Project:
    """
    Loaded topology: services in declaration order plus the declared networks and volumes.

    `source` is the topology text the project was loaded from; backends hand it to
    docker compose as is, so dependency ordering stays the backend's business.
    """

    def __init__(self,
                 name: str,
                 services: Iterable[ServiceDefinition],
                 source: str,
                 working_dir: Path,
                 networks: Iterable[str] = (),
                 volumes: Iterable[str] = ()):
        self._name = name
        self._services: Mapping[str, ServiceDefinition] = MappingProxyType({
            service.name: service for service in services
        })
        self._source = source
        self._working_dir = Path(working_dir)
        self._networks = tuple(networks)
        self._volumes = tuple(volumes)

    @property
    def name(self) -> str:
        return self._name

    @property
    def services(self) -> Mapping[str, ServiceDefinition]:
        return self._services

    @property
    def source(self) -> str:
        return self._source

    @property
    def working_dir(self) -> Path:
        return self._working_dir

    @property
    def networks(self) -> tuple[str, ...]:
        return self._networks

    @property
    def volumes(self) -> tuple[str, ...]:
        return self._volumes

    def names(self) -> list[str]:
        return list(self._services)

    def resolve(self, targets: Iterable[str] = ()) -> list[str]:
        requested = list(dict.fromkeys(targets))
        if not requested:
            return self.names()

        unknown = [name for name in requested if name not in self._services]
        if unknown:
            raise ServiceNotFoundError(unknown, self._name)
        return [name for name in self._services if name in requested]

    def __contains__(self, item) -> bool:
        return item in self._services

    def __iter__(self) -> Iterator[str]:
        return iter(self._services)

    def __len__(self) -> int:
        return len(self._services)

    def __getitem__(self, item) -> ServiceDefinition:
        if item not in self._services:
            raise ServiceNotFoundError([item], self._name)
        return self._services[item]

    def __repr__(self):
        return f'Project({self._name}, services={self.names()})'
