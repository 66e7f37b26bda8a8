import asyncio
from asyncio import subprocess

import vedro

from insta.backend.process_output import process_output_till_done


class Scenario(vedro.Scenario):
    subject = 'cancel reading output of running command'

    async def given_long_running_command(self):
        self.process = await asyncio.create_subprocess_exec(
            'sh', '-c', 'echo started; exec sleep 30',
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        self.reading = asyncio.create_task(process_output_till_done(self.process, verbose=False))

    async def when_reading_is_cancelled(self):
        await asyncio.sleep(0.05)
        self.reading.cancel()
        await asyncio.gather(self.reading, return_exceptions=True)

    def then_reading_should_be_cancelled(self):
        assert self.reading.cancelled()

    def and_command_should_be_terminated(self):
        assert self.process.returncode is not None
