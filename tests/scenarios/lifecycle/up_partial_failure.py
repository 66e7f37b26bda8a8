import vedro
from d42 import schema
from vedro import catched

from contexts.no_wait_config import no_wait_config
from contexts.project_loaded import project_loaded
from helpers.fake_backend import FakeBackend
from insta import LifecycleOrchestrator
from insta.errors import PartialFailureError


class Scenario(vedro.Scenario):
    subject = 'bring up services when one of them fails'

    def given_project(self):
        self.project = project_loaded()

    def given_backend_failing_init(self):
        self.backend = FakeBackend(completing={'web-data'}, failing={'web-init'})
        self.orchestrator = LifecycleOrchestrator(self.backend, no_wait_config())

    async def when_user_brings_up_all_services(self):
        with catched(Exception) as self.exc_info:
            await self.orchestrator.up(self.project)

    def then_it_should_raise_partial_failure(self):
        assert self.exc_info.type is PartialFailureError

    def and_it_should_report_each_service_outcome(self):
        assert self.exc_info.value.outcomes.as_json() == schema.dict({
            'web-data': schema.str('completed'),
            'web-init': schema.str('failed'),
            'web': schema.str('started'),
        })

    def and_it_should_name_failed_services(self):
        assert self.exc_info.value.services == ['web-init']

    async def and_started_services_should_be_left_running(self):
        state = await self.backend.state(self.project)
        assert state.get('web').is_running()
