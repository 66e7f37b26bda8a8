from insta.backend.backend_types import ExecOptions
from insta.backend.backend_types import ExecResult
from insta.backend.backend_types import ServiceOutcome
from insta.backend.backend_types import ServicesOutcome
from insta.backend.compose_backend import ComposeBackend
from insta.backend.interface import ContainerBackend
from insta.core.orchestrator import LifecycleOrchestrator
from insta.core.orchestrator import LifecycleRequest
from insta.core.orchestrator import Operation
from insta.core.service import InstaService
from insta.core.session import SessionBridge
from insta.core.session import SessionRequest
from insta.topology.classifier import ServiceRole
from insta.topology.classifier import classify
from insta.topology.loader import load_default_project
from insta.topology.loader import load_project
from insta.topology.project_types import Project
from insta.topology.project_types import ServiceDefinition
from insta.version import get_version

__version__ = get_version()
__all__ = (
    'InstaService', 'LifecycleOrchestrator', 'LifecycleRequest', 'Operation',
    'SessionBridge', 'SessionRequest', 'ContainerBackend', 'ComposeBackend',
    'ExecOptions', 'ExecResult', 'ServiceOutcome', 'ServicesOutcome',
    'Project', 'ServiceDefinition', 'ServiceRole', 'classify',
    'load_project', 'load_default_project',
)
