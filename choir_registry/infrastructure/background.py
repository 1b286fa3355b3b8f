"""Background task running the orphan photo sweep."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import timedelta

from sqlalchemy.orm import Session

from choir_registry.application.use_cases.assets import (
    ReconciliationReport,
    reconcile_orphan_assets,
)
from choir_registry.config import Settings
from choir_registry.infrastructure.storage import AssetStore

logger = logging.getLogger(__name__)


class OrphanSweepScheduler:
    """Run the orphan sweep after a warm-up delay and then periodically.

    Each run uses its own database session and executes in a worker thread so
    the event loop keeps serving requests. A failing run is logged and the loop
    carries on with the next one.
    """

    def __init__(
        self,
        *,
        session_factory: Callable[[], Session],
        asset_store_factory: Callable[[], AssetStore],
        delay_seconds: float,
        interval_seconds: float,
        grace_period: timedelta,
    ) -> None:
        self._session_factory = session_factory
        self._asset_store_factory = asset_store_factory
        self._delay_seconds = delay_seconds
        self._interval_seconds = interval_seconds
        self._grace_period = grace_period
        self._task: asyncio.Task[None] | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        session_factory: Callable[[], Session],
        asset_store_factory: Callable[[], AssetStore],
    ) -> "OrphanSweepScheduler":
        return cls(
            session_factory=session_factory,
            asset_store_factory=asset_store_factory,
            delay_seconds=settings.orphan_sweep_delay_seconds,
            interval_seconds=settings.orphan_sweep_interval_seconds,
            grace_period=timedelta(seconds=settings.orphan_grace_period_seconds),
        )

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="orphan-photo-sweep"
        )

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    def run_once(self) -> ReconciliationReport:
        """Run a single sweep synchronously and return its report."""

        session = self._session_factory()
        try:
            return reconcile_orphan_assets(
                session,
                self._asset_store_factory(),
                grace_period=self._grace_period,
            )
        finally:
            session.close()

    async def _run(self) -> None:
        await asyncio.sleep(self._delay_seconds)
        while True:
            try:
                await asyncio.to_thread(self.run_once)
            except Exception as exc:
                logger.exception("Orphan photo sweep failed: %s", exc)
            if self._interval_seconds <= 0:
                return
            await asyncio.sleep(self._interval_seconds)


__all__ = ["OrphanSweepScheduler"]
