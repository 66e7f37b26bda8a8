from insta.errors.base import InstaError


class BackendUnavailableError(InstaError):
    kind = 'backend unavailable'

    def __init__(self, message: str, log: str = ''):
        super().__init__(message)
        self.log = log


class CancelledError(InstaError):
    kind = 'cancelled'

    def __init__(self, operation: str, services: list[str] | None = None):
        super().__init__(f'{operation} cancelled', services)
        self.operation = operation
