import re
import shlex
from collections.abc import Hashable
from pathlib import Path

import yaml
from rich.text import Text

from insta.config import Config
from insta.config import DEFAULT_PROJECT_NAME
from insta.errors import TopologyError
from insta.output.console import CONSOLE
from insta.output.styles import Style
from insta.topology.project_types import Project
from insta.topology.project_types import ServiceDefinition

EMBEDDED_TOPOLOGY = Path(__file__).parent.parent / 'docker-compose.yaml'

SERVICE_NAME_RE = re.compile(r'^[a-zA-Z0-9][a-zA-Z0-9_.-]*$')
PROJECT_NAME_RE = re.compile(r'^[a-z0-9][a-z0-9_-]*$')


class UniqueKeysLoader(yaml.FullLoader):
    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen = set()
            for key_node, _ in node.value:
                key = self.construct_object(key_node, deep=deep)
                if not isinstance(key, Hashable):
                    continue
                if key in seen:
                    raise yaml.constructor.ConstructorError(
                        'while constructing a mapping', node.start_mark,
                        f'found duplicate key "{key}"', key_node.start_mark
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


def read_topology(content: str) -> dict:
    try:
        topology = yaml.load(content, Loader=UniqueKeysLoader)
    except yaml.YAMLError as e:
        raise TopologyError(f'Malformed topology:\n{e}') from None

    if not isinstance(topology, dict):
        raise TopologyError('Malformed topology: top level should be a mapping')
    return topology


def parse_environment(service: str, environment) -> dict[str, str | None]:
    if environment is None:
        return {}
    if isinstance(environment, dict):
        return {
            str(key): None if value is None else str(value)
            for key, value in environment.items()
        }
    if isinstance(environment, list):
        parsed = {}
        for item in environment:
            key, sep, value = str(item).partition('=')
            parsed[key] = value if sep else None
        return parsed
    raise TopologyError(f'Service {service}: environment should be a list or a mapping', [service])


def parse_command(service: str, command) -> tuple[str, ...] | None:
    if command is None:
        return None
    if isinstance(command, str):
        return tuple(shlex.split(command))
    if isinstance(command, list):
        return tuple(str(arg) for arg in command)
    raise TopologyError(f'Service {service}: command should be a string or a list', [service])


def parse_depends_on(service: str, depends_on) -> tuple[str, ...]:
    if depends_on is None:
        return ()
    if isinstance(depends_on, (list, dict)):
        return tuple(str(dependency) for dependency in depends_on)
    raise TopologyError(f'Service {service}: depends_on should be a list or a mapping', [service])


def parse_service(name, service_cfg) -> ServiceDefinition:
    if not isinstance(name, str) or not SERVICE_NAME_RE.match(name):
        raise TopologyError(f'Invalid service name: {name!r}', [str(name)])
    if service_cfg is None:
        service_cfg = {}
    if not isinstance(service_cfg, dict):
        raise TopologyError(f'Service {name}: definition should be a mapping', [name])
    if 'image' not in service_cfg and 'build' not in service_cfg:
        raise TopologyError(f'Service {name}: neither image nor build is set', [name])

    restart = service_cfg.get('restart')
    return ServiceDefinition(
        name=name,
        image=service_cfg.get('image'),
        build=service_cfg.get('build'),
        command=parse_command(name, service_cfg.get('command')),
        working_dir=service_cfg.get('working_dir'),
        environment=parse_environment(name, service_cfg.get('environment')),
        depends_on=parse_depends_on(name, service_cfg.get('depends_on')),
        restart=None if restart is None else str(restart),
    )


def check_dependencies(services: list[ServiceDefinition]) -> None:
    declared = {service.name for service in services}
    for service in services:
        unresolved = [dependency for dependency in service.depends_on if dependency not in declared]
        if unresolved:
            raise TopologyError(
                f'Service {service.name} depends on undeclared service(s): {", ".join(unresolved)}',
                [service.name]
            )


def load_project(content: str, working_dir: Path | str, project_name: str | None = None) -> Project:
    topology = read_topology(content)

    if project_name is None:
        project_name = topology.get('name') or DEFAULT_PROJECT_NAME
    project_name = str(project_name)
    if not PROJECT_NAME_RE.match(project_name):
        raise TopologyError(f'Invalid project name: {project_name!r}')

    services_cfg = topology.get('services') or {}
    if not isinstance(services_cfg, dict):
        raise TopologyError('Malformed topology: services should be a mapping')

    services = [parse_service(name, service_cfg) for name, service_cfg in services_cfg.items()]
    check_dependencies(services)

    return Project(
        name=project_name,
        services=services,
        source=content,
        working_dir=Path(working_dir),
        networks=list(topology.get('networks') or {}),
        volumes=list(topology.get('volumes') or {}),
    )


def load_default_project(config: Config = None) -> Project:
    if config is None:
        config = Config()

    if config.topology_override_path.exists():
        CONSOLE.print(
            Text('Using fetched topology: ', style=Style.info)
            .append(Text(str(config.topology_override_path), style=Style.mark_neutral))
        )
        return load_project(
            config.topology_override_path.read_text(),
            working_dir=Path.cwd(),
            project_name=config.project_name,
        )

    return load_project(EMBEDDED_TOPOLOGY.read_text(), working_dir=Path.cwd(), project_name=config.project_name)
