import vedro
from vedro import params

from insta.backend.compose_backend import classify_failure
from insta.errors import BackendUnavailableError
from insta.errors import ServiceNotFoundError
from insta.helpers.jobs_result import OperationError


class Scenario(vedro.Scenario):
    subject = 'classify docker compose failure: {reason}'

    @params('daemon down', 1,
            b'Cannot connect to the Docker daemon at unix:///var/run/docker.sock. Is the docker daemon running?',
            BackendUnavailableError)
    @params('remote endpoint down', 1, b'error during connect: Get "http://docker:2375/v1.45/containers/json"',
            BackendUnavailableError)
    @params('compose missing', 127, b'sh: 1: docker: not found', BackendUnavailableError)
    @params('unknown service', 1, b'no such service: queue', ServiceNotFoundError)
    @params('container failed', 1, b'Error response from daemon: failed to create task', type(None))
    def __init__(self, reason, returncode, stderr, error_type):
        self.reason = reason
        self.returncode = returncode
        self.stderr = stderr
        self.error_type = error_type

    def given_failed_operation(self):
        self.error = OperationError('docker compose up', self.returncode, b'', self.stderr)

    def when_failure_is_classified(self):
        self.classified = classify_failure(self.error, 'insta-tests')

    def then_it_should_be_of_expected_kind(self):
        assert type(self.classified) is self.error_type
