import vedro
from vedro import params

from contexts.project_loaded import project_loaded
from helpers.cli_runner import invoke_cli
from helpers.fake_backend import FakeBackend
from insta import InstaService


class Scenario(vedro.Scenario):
    subject = 'pass `{command}` options through to service'

    @params('grep -e x /etc/hosts')
    @params('ls -w 80')
    @params('tail --tty -n 5 log')
    @params('cat --help')
    def __init__(self, command):
        self.command = command

    def given_running_web(self):
        self.project = project_loaded()
        self.backend = FakeBackend()
        self.backend.run_containers(self.project, 'web')
        self.service = InstaService(backend=self.backend, project=self.project)

    async def when_user_connects_with_command(self):
        self.result = await invoke_cli(self.service, 'connect', '--no-tty', 'web', *self.command.split())

    def then_it_should_exit_successfully(self):
        assert self.result.exit_code == 0, self.result.output

    def and_command_should_reach_service_as_is(self):
        session = self.backend.sessions[0]
        assert session.command == self.command
        assert session.options.working_dir is None
        assert dict(session.options.env) == {}
