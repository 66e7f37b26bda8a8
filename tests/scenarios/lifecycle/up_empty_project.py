import vedro

from contexts.no_wait_config import no_wait_config
from contexts.project_loaded import EMPTY_TOPOLOGY
from contexts.project_loaded import project_loaded
from helpers.fake_backend import FakeBackend
from insta import LifecycleOrchestrator


class Scenario(vedro.Scenario):
    subject = 'bring up and down project without services'

    def given_empty_project(self):
        self.project = project_loaded(EMPTY_TOPOLOGY)

    def given_orchestrator(self):
        self.backend = FakeBackend()
        self.orchestrator = LifecycleOrchestrator(self.backend, no_wait_config())

    async def when_user_brings_project_up_and_down(self):
        self.up_outcome = await self.orchestrator.up(self.project)
        self.down_outcome = await self.orchestrator.down(self.project)

    def then_outcomes_should_be_empty(self):
        assert self.up_outcome.as_json() == {}
        assert self.down_outcome.as_json() == {}

    def and_backend_should_not_be_mutated(self):
        assert self.backend.mutations() == []
