import vedro
from vedro import params

from contexts.compose_stub import ComposeStub
from contexts.project_loaded import project_loaded
from contexts.stub_config import stub_config
from insta import ComposeBackend
from insta import ExecOptions


class Scenario(vedro.Scenario):
    subject = 'run docker compose exec {subject_suffix}'

    @params('without terminal, with workdir and env', ExecOptions(
        working_dir='/srv', tty=False, env={'GREETING': 'hello world', 'EMPTY': ''}
    ), ['--no-TTY', '--workdir', '/srv', '--env', 'GREETING=hello world', '--env', 'EMPTY='])
    @params('with terminal', ExecOptions(), [])
    def __init__(self, subject_suffix, options, expected_params):
        self.subject_suffix = subject_suffix
        self.options = options
        self.expected_params = expected_params

    def given_backend(self):
        self.stub = ComposeStub()
        self.project = project_loaded()
        self.backend = ComposeBackend(stub_config(self.stub.bin))

    async def when_user_runs_command_in_service(self):
        async with self.backend.exec_session(self.project, 'web', "echo 'hi there' | wc -c", self.options) as session:
            self.exit_code = await session.wait()

    def then_it_should_return_command_exit_code(self):
        assert self.exit_code == 0

    def and_command_should_run_through_shell_in_service(self):
        assert self.stub.subcommands() == [
            ['exec', *self.expected_params, 'web', 'sh', '-c', "echo 'hi there' | wc -c"],
        ]
