import os
import tempfile
from pathlib import Path

DEFAULT_PROJECT_NAME = 'insta'
DEFAULT_AUXILIARY_SUFFIXES = ('-data', '-init', '-server')


def _split_list(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if value is None:
        return default
    return tuple(item.strip() for item in value.split(',') if item.strip())


class Config:
    def __init__(self):
        self.project_name: str | None = os.environ.get('INSTA_PROJECT_NAME')
        self.docker_context: str | None = os.environ.get('INSTA_DOCKER_CONTEXT')
        self.docker_host: str | None = os.environ.get('DOCKER_HOST')
        self.docker_compose_bin: str = os.environ.get('INSTA_DOCKER_COMPOSE_BIN', 'docker compose')
        self.projects_path: Path = Path(os.environ.get(
            'INSTA_PROJECTS_DIRECTORY',
            Path(tempfile.gettempdir()) / 'insta'
        ))
        self.topology_url: str | None = os.environ.get('INSTA_TOPOLOGY_URL')
        self.topology_override_path: Path = Path(os.environ.get(
            'INSTA_TOPOLOGY_OVERRIDE_FILE',
            Path.home() / '.config' / 'insta' / 'docker-compose.yaml'
        ))
        self.auxiliary_suffixes: tuple[str, ...] = _split_list(
            os.environ.get('INSTA_AUXILIARY_SUFFIXES'), DEFAULT_AUXILIARY_SUFFIXES
        )
        self.service_up_check_attempts = int(os.environ.get('INSTA_SERVICE_UP_CHECK_ATTEMPTS', 30))
        self.service_up_check_delay = float(os.environ.get('INSTA_SERVICE_UP_CHECK_DELAY', 1))
        self.verbose_docker_compose_commands = bool(os.environ.get('VERBOSE_DOCKER_COMPOSE_OUTPUT_TO_STDOUT', False))
        self.debug_docker_compose_commands = bool(os.environ.get('DEBUG_DOCKER_COMPOSE_COMMANDS', False))
