from typing import TYPE_CHECKING

from insta.errors.base import InstaError

if TYPE_CHECKING:
    from insta.backend.backend_types import ServicesOutcome


class ServiceNotFoundError(InstaError):
    kind = 'service not found'

    def __init__(self, services: list[str], project: str):
        super().__init__(
            f'No such service{"s" if len(services) > 1 else ""} in project {project}: {", ".join(services)}',
            services,
        )
        self.project = project


class ServiceNotRunningError(InstaError):
    kind = 'service not running'

    def __init__(self, service: str, project: str, state: str | None = None):
        details = f' (state: {state})' if state else ''
        super().__init__(
            f'Service {service} is not running in project {project}{details}; bring it up first',
            [service],
        )
        self.project = project
        self.state = state


class PartialFailureError(InstaError):
    kind = 'partial failure'

    def __init__(self, operation: str, outcomes: 'ServicesOutcome', log: str = ''):
        failed = outcomes.failed()
        succeeded = outcomes.succeeded()
        super().__init__(
            f"Can't {operation} services: {', '.join(failed)}; "
            f"succeeded: {', '.join(succeeded) if succeeded else 'none'}",
            failed,
        )
        self.operation = operation
        self.outcomes = outcomes
        self.log = log
