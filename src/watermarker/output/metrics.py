from __future__ import annotations

from dataclasses import asdict, dataclass
from time import perf_counter


@dataclass(slots=True)
class RunMetrics:
    files_processed: int = 0
    files_skipped: int = 0
    execution_time_seconds: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


class Timer:
    def __init__(self) -> None:
        self._start = perf_counter()

    def elapsed(self) -> float:
        return perf_counter() - self._start
