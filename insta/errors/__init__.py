from insta.errors.backend import BackendUnavailableError
from insta.errors.backend import CancelledError
from insta.errors.base import InstaError
from insta.errors.services import PartialFailureError
from insta.errors.services import ServiceNotFoundError
from insta.errors.services import ServiceNotRunningError
from insta.errors.topology import TopologyError
from insta.errors.topology import TopologyFetchError

__all__ = (
    'InstaError', 'TopologyError', 'TopologyFetchError', 'ServiceNotFoundError',
    'ServiceNotRunningError', 'PartialFailureError', 'BackendUnavailableError', 'CancelledError',
)
