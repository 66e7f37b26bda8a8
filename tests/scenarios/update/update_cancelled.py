import asyncio
import tempfile
from pathlib import Path

import vedro
from aiohttp import web
from aiohttp.test_utils import TestServer
from vedro import catched

from helpers.cancel_later import cancel_later
from insta import InstaService
from insta.config import Config
from insta.errors import CancelledError


class Scenario(vedro.Scenario):
    subject = 'cancel topology update while it is being fetched'

    def given_config_with_override_path(self):
        self.config = Config()
        self.config.topology_override_path = Path(tempfile.mkdtemp()) / 'docker-compose.yaml'

    async def given_server_that_never_answers(self):
        self.release = asyncio.Event()

        async def handler(request):
            await self.release.wait()
            return web.Response(status=503)

        app = web.Application()
        app.router.add_get('/docker-compose.yaml', handler)
        self.server = TestServer(app)
        await self.server.start_server()

    async def when_user_cancels_update(self):
        cancel = asyncio.Event()
        try:
            with catched(Exception) as self.exc_info:
                await asyncio.gather(
                    InstaService(config=self.config).update(
                        str(self.server.make_url('/docker-compose.yaml')), cancel
                    ),
                    cancel_later(cancel),
                )
        finally:
            self.release.set()
            await self.server.close()

    def then_it_should_raise_cancelled(self):
        assert self.exc_info.type is CancelledError

    def and_topology_should_not_be_written(self):
        assert not self.config.topology_override_path.exists()
