import vedro
from d42 import schema

from contexts.no_wait_config import no_wait_config
from contexts.project_loaded import project_loaded
from helpers.fake_backend import BackendCall
from helpers.fake_backend import FakeBackend
from insta import LifecycleOrchestrator


class Scenario(vedro.Scenario):
    subject = 'bring up all services'

    def given_project(self):
        self.project = project_loaded()

    def given_backend(self):
        self.backend = FakeBackend(completing={'web-data', 'web-init'})

    def given_orchestrator(self):
        self.orchestrator = LifecycleOrchestrator(self.backend, no_wait_config())

    async def when_user_brings_up_all_services(self):
        self.outcome = await self.orchestrator.up(self.project)

    def then_it_should_start_every_service(self):
        assert self.outcome.as_json() == schema.dict({
            'web-data': schema.str('completed'),
            'web-init': schema.str('completed'),
            'web': schema.str('started'),
        })

    def and_backend_should_get_exactly_one_start_request(self):
        assert self.backend.mutations() == [
            BackendCall('start', 'insta-tests', ('web-data', 'web-init', 'web')),
        ]
