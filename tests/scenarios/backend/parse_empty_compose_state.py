import vedro

from insta.backend.backend_types import ServicesState


class Scenario(vedro.Scenario):
    subject = 'parse docker compose ps output without containers'

    def when_empty_output_is_parsed(self):
        self.state = ServicesState.from_compose_output('\n')

    def then_state_should_be_empty(self):
        assert len(self.state) == 0
        assert self.state.names() == []
