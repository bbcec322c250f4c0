# pyright: reportMissingTypeStubs=false, reportUnknownMemberType=false

from __future__ import annotations

from typing import Callable, final
from typing_extensions import override

from apscheduler.schedulers.background import BackgroundScheduler

from withkit_assets.domain.protocols.scheduler_protocol import SchedulerProtocol


@final
class APSchedulerRunner(SchedulerProtocol):
    """Background poller for the watch command.

    A rebuild that overruns its interval is never run twice in parallel;
    missed ticks collapse into one.
    """

    def __init__(self) -> None:
        self._scheduler = BackgroundScheduler(
            daemon=True,
            job_defaults={"max_instances": 1, "coalesce": True},
        )

    @property
    def running(self) -> bool:
        return bool(self._scheduler.running)

    @override
    def schedule_interval(
        self, job_id: str, seconds: int, func: Callable[[], object]
    ) -> None:
        interval = max(1, int(seconds))
        _ = self._scheduler.add_job(
            func,
            trigger="interval",
            id=job_id,
            name=f"{job_id} every {interval}s",
            seconds=interval,
            misfire_grace_time=interval,
            replace_existing=True,
        )

    @override
    def start(self) -> None:
        if not self.running:
            self._scheduler.start()

    @override
    def shutdown(self) -> None:
        if not self.running:
            return
        # Let a rebuild in progress finish its writes.
        self._scheduler.shutdown(wait=True)
