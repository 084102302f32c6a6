#!/usr/bin/env python3
"""
Persisted simulation statistics.

All reads and writes of the aggregate go through a StatsStore:
- load() once at startup,
- record_reset(runtime) from the reset path,
- checkpoint(runtime) on pause and shutdown.

JSON schema (stats file):
{
  "simCount": 12,        # finished simulations
  "maxSimTime": 84.2     # longest epoch, seconds
}

Persistence is best-effort. A failed write is logged and the in-memory
aggregate stays authoritative; the next reset or checkpoint writes again.
"""
import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class StatsAggregate:
    total_simulations: int = 0
    longest_runtime_seconds: float = 0.0


class StatsStore:
    """In-memory store; subclasses override _read/_write to persist."""

    def __init__(self, aggregate: Optional[StatsAggregate] = None):
        self.aggregate = aggregate or StatsAggregate()

    def load(self) -> StatsAggregate:
        data = self._read()
        if data is not None:
            self.aggregate = data
        return self.aggregate

    def record_reset(self, runtime_seconds: float) -> StatsAggregate:
        """Close an epoch that lasted runtime_seconds and persist the result."""
        if runtime_seconds > self.aggregate.longest_runtime_seconds:
            self.aggregate.longest_runtime_seconds = float(runtime_seconds)
        self.aggregate.total_simulations += 1
        self.save()
        return self.aggregate

    def checkpoint(self, runtime_seconds: float) -> StatsAggregate:
        """Persist without closing the epoch; only the longest runtime may change."""
        if runtime_seconds > self.aggregate.longest_runtime_seconds:
            self.aggregate.longest_runtime_seconds = float(runtime_seconds)
        self.save()
        return self.aggregate

    def save(self) -> bool:
        return self._write(self.aggregate)

    def _read(self):
        return None

    def _write(self, aggregate: StatsAggregate) -> bool:
        return True


class JsonStatsStore(StatsStore):
    def __init__(self, path: str):
        super().__init__()
        self.path = os.path.expanduser(path)

    def _read(self):
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.warning("Could not read stats from %s: %s", self.path, exc)
            return None
        try:
            return StatsAggregate(
                total_simulations=int(data.get("simCount", 0)),
                longest_runtime_seconds=float(data.get("maxSimTime", 0.0)),
            )
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning("Ignoring malformed stats in %s: %s", self.path, exc)
            return None

    def _write(self, aggregate: StatsAggregate) -> bool:
        payload = {
            "simCount": aggregate.total_simulations,
            "maxSimTime": aggregate.longest_runtime_seconds,
        }
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(payload, f)
        except OSError as exc:
            logger.warning("Could not save stats to %s: %s", self.path, exc)
            return False
        logger.debug("Saved stats to %s: %s", self.path, payload)
        return True


def format_stats_text(elapsed_seconds: float, aggregate: StatsAggregate) -> str:
    longest = max(aggregate.longest_runtime_seconds, elapsed_seconds)
    return (
        f"Current Runtime: {int(elapsed_seconds)}s\n"
        f"Longest Runtime: {int(longest)}s\n"
        f"Total Simulations: {aggregate.total_simulations}"
    )
