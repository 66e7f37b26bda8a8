from functools import partial
from typing import Awaitable
from typing import Callable
from typing import List

from rich.text import Text
from rtry import retry

from insta.backend.backend_types import ServiceState
from insta.backend.backend_types import ServicesState
from insta.helpers.jobs_result import JobResult
from insta.output.logger import Report
from insta.output.logger import WaitVerbosity
from insta.output.styles import Style


def is_service_not_settled(service_state: ServiceState) -> bool:
    return not service_state.is_settled()


class SettleProgress:
    """
    Progress of one wait: how many checks were made and which pending state was reported last.
    """

    def __init__(self, attempts: int):
        self._attempts = attempts
        self.checks = 0
        self._reported: ServicesState | None = None

    def is_first_check(self) -> bool:
        return self.checks == 0

    def checked(self) -> None:
        self.checks += 1

    def is_exhausted(self) -> bool:
        return self.checks >= self._attempts

    def is_new(self, pending: ServicesState) -> bool:
        return self._reported != pending

    def reported(self, pending: ServicesState) -> None:
        self._reported = pending


async def check_all_services_settled(
    get_services_state: Callable[[], Awaitable[ServicesState]],
    services: List[str],
    progress: SettleProgress,
    verbose: WaitVerbosity = WaitVerbosity.COMPACT,
) -> JobResult:
    report = Report()
    if progress.is_first_check() and verbose != WaitVerbosity.QUIET:
        report.line(Text(f'Waiting for {", ".join(services)} to settle', style=Style.info))

    services_state = await get_services_state()
    progress.checked()
    targets_state = ServicesState([service for service in services_state if service.name in services])

    if all(service.is_settled() for service in targets_state):
        if verbose == WaitVerbosity.COMPACT:
            report.line(Text(' ✔ All services settled', style=Style.mark_neutral))
        elif verbose == WaitVerbosity.FULL:
            report.line(Text(f' ✔ All services settled after {progress.checks} check(s):', style=Style.mark_neutral))
            report.line(targets_state.as_rich_text())
        report.print()
        return JobResult.GOOD

    if progress.is_exhausted():
        report.line(Text(f' ✗ Stop waiting after {progress.checks} check(s). Still not ready services:',
                         style=Style.bad))
        report.line(targets_state.as_rich_text(filter=is_service_not_settled))
        report.print()
        return JobResult.BAD

    pending = ServicesState([service for service in targets_state if not service.is_settled()])
    # every check is shown in full mode, otherwise only changes of the pending set
    if verbose == WaitVerbosity.FULL or (verbose == WaitVerbosity.COMPACT and progress.is_new(pending)):
        report.line(Text(' ✗ Still not ready services:', style=Style.suspicious))
        report.line(pending.as_rich_text())
    progress.reported(pending)
    report.print()

    return JobResult.BAD


class WaitAllServicesSettled:
    def __init__(self, attempts: int = 30, delay_s: float = 1):
        self._attempts = max(attempts, 1)
        self._delay_s = delay_s

    def make_checker(self) -> Callable:
        return partial(
            retry(
                attempts=self._attempts,
                delay=self._delay_s,
                until=lambda x: x != JobResult.GOOD,
                swallow=(),
            )(check_all_services_settled),
            progress=SettleProgress(self._attempts),
        )


wait_all_services_settled = WaitAllServicesSettled
