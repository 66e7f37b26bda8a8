import vedro
from d42 import schema

from contexts.compose_output import ps_json_lines
from contexts.compose_output import ps_line
from contexts.project_loaded import WEB_TOPOLOGY
from contexts.project_loaded import project_loaded
from helpers.fake_compose_interface import RecordingComposeInterface
from insta import ComposeBackend
from insta.config import Config


class Scenario(vedro.Scenario):
    subject = 'start and stop services through docker compose backend'

    def given_config(self):
        self.config = Config()
        self.config.projects_path = self.config.projects_path / 'scenarios'

    def given_project(self):
        self.project = project_loaded()

    def given_compose_reporting_running_web(self):
        RecordingComposeInterface.reset(ps_output=ps_json_lines(
            ps_line('web'),
            ps_line('web-init', state='exited', exit_code=0),
        ))
        self.backend = ComposeBackend(self.config, compose_interface=RecordingComposeInterface)

    async def when_user_starts_services(self):
        self.start_outcome = await self.backend.start(self.project, ['web-init', 'web'])

    def then_backend_should_report_compose_state(self):
        assert self.start_outcome.as_json() == schema.dict({
            'web-init': schema.str('completed'),
            'web': schema.str('started'),
        })

    def and_topology_should_be_materialized(self):
        compose_file = self.config.projects_path / 'insta-tests' / 'docker-compose.yaml'
        assert compose_file.read_text() == WEB_TOPOLOGY

    async def when_user_stops_whole_project(self):
        RecordingComposeInterface.ps_output = ''
        self.stop_outcome = await self.backend.stop(self.project, ['web-data', 'web-init', 'web'])

    def then_compose_down_should_target_whole_project(self):
        assert ('down', 'insta-tests', ()) in RecordingComposeInterface.calls

    def and_every_service_should_be_stopped(self):
        assert self.stop_outcome.as_json() == schema.dict({
            'web-data': schema.str('stopped'),
            'web-init': schema.str('stopped'),
            'web': schema.str('stopped'),
        })
