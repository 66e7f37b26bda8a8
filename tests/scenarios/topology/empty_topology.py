import vedro

from contexts.project_loaded import EMPTY_TOPOLOGY
from contexts.project_loaded import project_loaded


class Scenario(vedro.Scenario):
    subject = 'load topology without services'

    def when_user_loads_project(self):
        self.project = project_loaded(EMPTY_TOPOLOGY)

    def then_project_should_have_no_services(self):
        assert len(self.project) == 0

    def and_all_targets_should_resolve_to_nothing(self):
        assert self.project.resolve() == []
