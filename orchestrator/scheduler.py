"""Periodic execution of blocking jobs on the asyncio loop.

Jobs (sync, notification checks) do blocking file and network IO, so each
run happens in a worker thread; several schedules can share one loop.
"""
import asyncio
import logging
import typing as t
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class Schedule:
    """A job and how often to run it."""
    name: str
    job: t.Callable[[], t.Any]
    interval_seconds: float
    run_immediately: bool = True


async def run_periodic(
    job: t.Callable[[], t.Any],
    interval_seconds: float,
    max_runs: t.Optional[int] = None,
    name: str = "job",
    run_immediately: bool = True,
) -> int:
    """Run ``job`` now and then every ``interval_seconds``.

    A failing run is logged and the loop carries on with the next one.

    Args:
        job: Blocking callable, run with ``asyncio.to_thread``.
        interval_seconds: Pause between the end of one run and the next.
        max_runs: Stop after this many runs; None runs until cancelled.
        name: Label used in log records.
        run_immediately: Run once before the first pause; otherwise
            wait one interval first.

    Returns:
        The number of runs performed.
    """
    runs = 0
    if not run_immediately:
        await asyncio.sleep(interval_seconds)
    while max_runs is None or runs < max_runs:
        try:
            await asyncio.to_thread(job)
        except Exception:
            logger.exception("Scheduled %s failed", name)
        runs += 1
        if max_runs is not None and runs >= max_runs:
            break
        await asyncio.sleep(interval_seconds)
    return runs


async def run_schedules(
    schedules: t.Sequence[Schedule],
    max_runs: t.Optional[int] = None,
) -> dict[str, int]:
    """Run several schedules side by side.

    Returns:
        Number of runs per schedule name.
    """
    tasks = [
        run_periodic(
            s.job,
            s.interval_seconds,
            max_runs=max_runs,
            name=s.name,
            run_immediately=s.run_immediately,
        )
        for s in schedules
    ]
    counts = await asyncio.gather(*tasks)
    return {s.name: count for s, count in zip(schedules, counts)}
