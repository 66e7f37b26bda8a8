from enum import Enum
from typing import Iterable

from insta.config import DEFAULT_AUXILIARY_SUFFIXES
from insta.topology.project_types import Project


class ServiceRole(Enum):
    PRIMARY = 'primary'
    AUXILIARY = 'auxiliary'


def service_role(name: str, suffixes: Iterable[str] = DEFAULT_AUXILIARY_SUFFIXES) -> ServiceRole:
    if any(name.endswith(suffix) for suffix in suffixes):
        return ServiceRole.AUXILIARY
    return ServiceRole.PRIMARY


def classify(project: Project, suffixes: Iterable[str] = DEFAULT_AUXILIARY_SUFFIXES) -> dict[str, ServiceRole]:
    suffixes = tuple(suffixes)
    return {name: service_role(name, suffixes) for name in project}


def primary_services(project: Project, suffixes: Iterable[str] = DEFAULT_AUXILIARY_SUFFIXES) -> list[str]:
    return [
        name
        for name, role in classify(project, suffixes).items()
        if role == ServiceRole.PRIMARY
    ]
