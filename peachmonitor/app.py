"""메인 오케스트레이터: 저장소, 갱신 사이클, 스케줄러 연결 및 실행 모드 관리."""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import Any

from peachmonitor.alerts.thresholds import ThresholdStore
from peachmonitor.services.scheduler import Scheduler
from peachmonitor.services.update_cycle import CounterReader, CycleResult, UpdateCycle
from peachmonitor.storage.json_store import ALERTS_DOC, THRESHOLDS_DOC, TRAFFIC_DOC, JsonStore
from peachmonitor.storage.models import AlertFlags, CumulativeTotals, Thresholds
from peachmonitor.traffic.counters import read_interface_counters
from peachmonitor.utils.config import Config

logger = logging.getLogger("peachmonitor.app")


class PeachMonitor:
    """최상위 애플리케이션 오케스트레이터.

    단발 갱신(update), 종료 전 저장(save), 문서 조회(snapshot),
    데몬 루프(run_daemon)를 제공한다. 실제 작업은 UpdateCycle과
    Scheduler에 위임한다.
    """

    def __init__(self, config: Config, reader: CounterReader = read_interface_counters) -> None:
        self.config = config
        self.iface  = config.get("monitor.iface", "wlan0")

        self.store      = JsonStore(config.store_directory)
        self.thresholds = ThresholdStore(self.store, unit=config.get("thresholds.unit", "B"))
        self.cycle      = UpdateCycle(self.store, self.thresholds, self.iface, reader=reader)
        self.scheduler  = Scheduler(
            self.cycle,
            interval=float(config.get("monitor.interval_seconds", 60)),
        )

    def update(self) -> CycleResult:
        """UpdateCycle을 한 번 실행한다."""
        return self.scheduler.run_once()

    def save(self) -> CycleResult:
        """SaveOperation을 한 번 실행한다."""
        return self.scheduler.run_once(save=True)

    def snapshot(self) -> dict[str, Any]:
        """세 문서를 변경 없이 읽어 반환한다. 임계값은 파일에 저장된 값 그대로다."""
        return {
            "traffic": self.store.load(TRAFFIC_DOC, CumulativeTotals).to_dict(),
            "thresholds": self.store.load(THRESHOLDS_DOC, Thresholds).to_dict(),
            "alerts": self.store.load(ALERTS_DOC, AlertFlags).to_dict(),
        }

    async def run_daemon(self) -> None:
        """SIGINT/SIGTERM을 받을 때까지 스케줄러 루프를 실행한다."""
        loop = asyncio.get_running_loop()

        def _signal_handler() -> None:
            logger.info("Shutdown signal received")
            self.scheduler.stop()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _signal_handler)

        logger.info("PeachMonitor daemon starting (store=%s)", self.store.directory)
        try:
            await self.scheduler.run_forever()
        finally:
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.remove_signal_handler(sig)
        logger.info("Terminating gracefully...")
