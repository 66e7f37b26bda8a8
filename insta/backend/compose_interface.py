import asyncio
import os
import pprint
import shlex
import sys
from asyncio import subprocess
from pathlib import Path

from rich.text import Text

from insta.backend.backend_types import ServicesState
from insta.backend.process_output import process_output_till_done
from insta.config import Config
from insta.helpers.jobs_result import JobResult
from insta.helpers.jobs_result import OperationError
from insta.output.console import CONSOLE
from insta.output.console import ERR_CONSOLE
from insta.output.styles import Style


class ComposeShellInterface:
    def __init__(self, project_name: str, compose_file: Path, project_directory: Path,
                 execution_envs: dict = None, config: Config = None):
        if config is None:
            config = Config()
        self.project_name = project_name
        self.compose_file = compose_file
        self.project_directory = project_directory
        self.execution_envs = dict(os.environ)
        if config.docker_host:
            self.execution_envs['DOCKER_HOST'] = config.docker_host
        if config.docker_context:
            self.execution_envs['DOCKER_CONTEXT'] = config.docker_context
        if execution_envs is not None:
            self.execution_envs |= execution_envs
        self.docker_compose_bin = config.docker_compose_bin
        self.verbose_docker_compose_commands = config.verbose_docker_compose_commands
        self.debug_docker_compose_commands = config.debug_docker_compose_commands

    def _base_cmd(self) -> str:
        return (f'{self.docker_compose_bin}'
                f' --project-name {shlex.quote(self.project_name)}'
                f' --project-directory {shlex.quote(str(self.project_directory))}'
                f' --file {shlex.quote(str(self.compose_file))}')

    def _print_cmd(self, cmd: str, console=CONSOLE) -> None:
        debug = f'; in {self.project_directory}; with {pprint.pformat(self.execution_envs)}' \
            if self.debug_docker_compose_commands else ''
        console.print(Text(
            f'{cmd}',
            style=Style.context
        ) + ' ' + Text(
            f'{debug}',
            style=Style.regular
        ))

    async def _run(self, cmd: str, verbose: bool) -> tuple[JobResult | OperationError, bytes, bytes]:
        sys.stdout.flush()
        process = await asyncio.create_subprocess_shell(
            cmd,
            env=self.execution_envs,
            cwd=self.project_directory,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        self._print_cmd(cmd)
        stdout, stderr = await process_output_till_done(process, verbose)

        if process.returncode != 0:
            return OperationError(cmd, process.returncode, stdout, stderr), stdout, stderr
        return JobResult.GOOD, stdout, stderr

    async def dc_state(self) -> ServicesState | OperationError:
        cmd = f'{self._base_cmd()} ps --all --format json'
        job_result, stdout, stderr = await self._run(cmd, verbose=False)
        if job_result != JobResult.GOOD:
            return job_result
        return ServicesState.from_compose_output(stdout.decode('utf-8'))

    async def dc_up(self, services: list[str]) -> JobResult | OperationError:
        cmd = (f'{self._base_cmd()} up --detach --pull missing --timeout 300 '
               + ' '.join(shlex.quote(service) for service in services))
        job_result, _, _ = await self._run(cmd, verbose=self.verbose_docker_compose_commands)
        return job_result

    async def dc_down(self, services: list[str]) -> JobResult | OperationError:
        cmd = (f'{self._base_cmd()} down --timeout 30 '
               + ' '.join(shlex.quote(service) for service in services))
        job_result, _, _ = await self._run(cmd, verbose=self.verbose_docker_compose_commands)
        return job_result

    async def dc_exec_process(self, service: str, command: str, working_dir: str | None = None,
                              tty: bool = True, env: dict = None) -> asyncio.subprocess.Process:
        """
        Starts `docker compose exec` attached to this process stdin/stdout/stderr.

        With tty enabled docker compose puts the terminal into raw mode and the
        remote shell receives keystrokes (and Ctrl+C) directly.
        """
        params = []
        if not tty:
            params += ['--no-TTY']
        if working_dir:
            params += ['--workdir', shlex.quote(working_dir)]
        for key, value in (env or {}).items():
            params += ['--env', shlex.quote(f'{key}={value}')]

        cmd = (f'{self._base_cmd()} exec {" ".join(params)} {shlex.quote(service)} '
               f'sh -c {shlex.quote(command)}')
        sys.stdout.flush()
        self._print_cmd(cmd, console=ERR_CONSOLE)
        return await asyncio.create_subprocess_shell(
            cmd,
            env=self.execution_envs,
            cwd=self.project_directory,
        )
