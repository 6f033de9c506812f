"""Scheduler - 단발 실행 또는 고정 주기 갱신 루프."""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import TYPE_CHECKING

from peachmonitor.errors import CorruptStoreError, InterfaceUnavailableError, StoreIOError

if TYPE_CHECKING:
    from peachmonitor.services.update_cycle import CycleResult, UpdateCycle

logger = logging.getLogger("peachmonitor.services.scheduler")

DEFAULT_INTERVAL_SECONDS = 60.0


class SchedulerState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    WAITING = "waiting"
    STOPPED = "stopped"


class Scheduler:
    """UpdateCycle을 한 번 또는 취소될 때까지 주기적으로 실행한다.

    루프는 단일 스레드 협력 방식이다. 사이클은 이벤트 루프 스레드에서
    동기적으로 실행되므로 종료 요청은 사이클 사이의 대기 중에만 반영되고,
    진행 중인 사이클을 중단하지 않는다.
    """

    def __init__(self, cycle: UpdateCycle, interval: float = DEFAULT_INTERVAL_SECONDS) -> None:
        """사이클과 실행 간격(초)을 설정한다."""
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.cycle    = cycle
        self.interval = interval
        self.cycles_completed = 0
        self.cycles_failed    = 0
        self._state      = SchedulerState.IDLE
        self._stop_event = asyncio.Event()

    @property
    def state(self) -> SchedulerState:
        return self._state

    def run_once(self, save: bool = False) -> CycleResult:
        """UpdateCycle 또는 SaveOperation을 정확히 한 번 실행한다.

        모든 오류는 호출자에게 그대로 전파된다.
        """
        self._state = SchedulerState.RUNNING
        try:
            result = self.cycle.save() if save else self.cycle.run()
        finally:
            self._state = SchedulerState.IDLE
        self.cycles_completed += 1
        return result

    def stop(self) -> None:
        """다음 사이클 경계에서 루프를 종료하도록 요청한다."""
        self._stop_event.set()

    async def run_forever(self) -> None:
        """stop()이 호출될 때까지 interval 간격으로 사이클을 반복한다.

        인터페이스 오류와 저장소 I/O 오류는 기록 후 해당 사이클만 건너뛴다.
        CorruptStoreError는 치명적이므로 루프를 멈추고 전파한다.
        """
        logger.info(
            "Scheduler started (iface=%s, interval=%.1fs)",
            self.cycle.iface, self.interval,
        )
        while not self._stop_event.is_set():
            self._state = SchedulerState.RUNNING
            try:
                self.cycle.run()
                self.cycles_completed += 1
            except InterfaceUnavailableError as exc:
                self.cycles_failed += 1
                logger.warning("Cycle skipped: %s", exc)
            except StoreIOError:
                self.cycles_failed += 1
                logger.exception("Cycle skipped: store write failed")
            except CorruptStoreError:
                self._state = SchedulerState.STOPPED
                logger.critical("Corrupt store document, stopping scheduler")
                raise

            self._state = SchedulerState.WAITING
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass

        self._state = SchedulerState.STOPPED
        logger.info(
            "Scheduler stopped (%d completed, %d skipped)",
            self.cycles_completed, self.cycles_failed,
        )
