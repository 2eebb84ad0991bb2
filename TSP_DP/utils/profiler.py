# TSP_DP/utils/profiler.py
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional


class Profiler:
    """Wall-clock record per pipeline stage (read / validate / solve / render)."""

    def __init__(self):
        self.records: List[Dict[str, Any]] = []

    def record(self, *, stage: str, elapsed_sec: float, error: Optional[str]):
        self.records.append({
            "stage": stage,
            "elapsed_sec": float(elapsed_sec),
            "ok": error is None,
            "error": error or ""
        })

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        t0 = time.perf_counter()
        try:
            yield
        except Exception as e:
            self.record(stage=name, elapsed_sec=time.perf_counter() - t0, error=f"{type(e).__name__}: {e}")
            raise
        self.record(stage=name, elapsed_sec=time.perf_counter() - t0, error=None)

    def dumps(self) -> Dict[str, Any]:
        total = sum(r["elapsed_sec"] for r in self.records)
        slow = sorted(self.records, key=lambda x: x["elapsed_sec"], reverse=True)[:5]
        return {
            "total_elapsed_sec": float(total),
            "records": self.records,
            "top5_slowest": slow,
        }
