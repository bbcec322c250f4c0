from __future__ import annotations

from typing import Callable, Protocol


class SchedulerProtocol(Protocol):
    def schedule_interval(
        self, job_id: str, seconds: int, func: Callable[[], object]
    ) -> None: ...

    def start(self) -> None: ...

    def shutdown(self) -> None: ...
