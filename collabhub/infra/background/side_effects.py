# =============================================================================
# File: collabhub/infra/background/side_effects.py
# Description: Runner for best-effort side effects (mention email, etc.)
#
# A side effect is a coroutine whose failure must never reach the flow that
# triggered it. submit() schedules it as a task and returns immediately; the
# task resolves to a SideEffectOutcome instead of raising. Failures are
# logged, counted in Prometheus and kept in a bounded failure log so callers
# and tests can inspect them after drain().
# =============================================================================

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Awaitable, Deque, Dict, List, Optional, Set

from collabhub.common.exceptions.exceptions import BestEffortSideEffectFailure
from collabhub.infra.metrics.realtime_metrics import side_effect_failures_total, side_effects_pending

log = logging.getLogger("collabhub.infra.side_effects")


@dataclass(frozen=True)
class SideEffectOutcome:
    name: str
    ok: bool
    duration_ms: float
    error: Optional[BestEffortSideEffectFailure] = None
    context: Dict[str, Any] = field(default_factory=dict)


class SideEffectRunner:
    """Fire-and-forget with a failure channel."""

    def __init__(self, failure_log_size: int = 500):
        self._pending: Set[asyncio.Task] = set()
        self._failures: Deque[SideEffectOutcome] = deque(maxlen=failure_log_size)
        self._completed = 0
        self._closed = False

    def submit(self, name: str, coro: Awaitable[Any], **context: Any) -> asyncio.Task:
        """Schedule coro in the background. The task resolves to an outcome; only cancellation propagates."""
        task = asyncio.ensure_future(self._run(name, coro, context))
        if not self._closed:
            self._pending.add(task)
            side_effects_pending.inc()
            task.add_done_callback(self._on_done)
        return task

    async def _run(self, name: str, coro: Awaitable[Any], context: Dict[str, Any]) -> SideEffectOutcome:
        started = time.monotonic()
        try:
            await coro
        except asyncio.CancelledError:
            self._record_failure(name, asyncio.CancelledError("cancelled"), started, context)
            log.warning(f"Side effect '{name}' cancelled {context}")
            raise
        except Exception as e:
            outcome = self._record_failure(name, e, started, context)
            log.warning(f"Side effect '{name}' failed {context}: {e}", exc_info=True)
            return outcome

        self._completed += 1
        return SideEffectOutcome(
            name=name,
            ok=True,
            duration_ms=(time.monotonic() - started) * 1000,
            context=context,
        )

    def _record_failure(
            self,
            name: str,
            cause: BaseException,
            started: float,
            context: Dict[str, Any],
    ) -> SideEffectOutcome:
        outcome = SideEffectOutcome(
            name=name,
            ok=False,
            duration_ms=(time.monotonic() - started) * 1000,
            error=BestEffortSideEffectFailure(name, cause),
            context=context,
        )
        self._failures.append(outcome)
        side_effect_failures_total.labels(name=name).inc()
        return outcome

    def _on_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        side_effects_pending.dec()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def failures(self) -> List[SideEffectOutcome]:
        return list(self._failures)

    def stats(self) -> Dict[str, int]:
        return {
            "pending": len(self._pending),
            "completed": self._completed,
            "failed": len(self._failures),
        }

    async def drain(self, timeout: Optional[float] = None) -> List[SideEffectOutcome]:
        """Wait for everything submitted so far. Returns their outcomes."""
        if not self._pending:
            return []
        tasks = list(self._pending)
        done, not_done = await asyncio.wait(tasks, timeout=timeout)
        if not_done:
            log.warning(f"{len(not_done)} side effects still running after drain timeout")
        return [t.result() for t in done if not t.cancelled()]

    async def shutdown(self, timeout: float = 10.0) -> None:
        """Stop accepting new work, wait up to timeout, cancel the rest."""
        self._closed = True
        await self.drain(timeout=timeout)
        leftovers = list(self._pending)
        for task in leftovers:
            task.cancel()
        if leftovers:
            await asyncio.gather(*leftovers, return_exceptions=True)
            log.info(f"Cancelled {len(leftovers)} pending side effects on shutdown")
