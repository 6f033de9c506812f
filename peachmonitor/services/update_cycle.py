"""UpdateCycle - 누적 → 평가 → 저장 한 번의 갱신 단위."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from peachmonitor.alerts.evaluator import evaluate
from peachmonitor.alerts.thresholds import ThresholdStore
from peachmonitor.storage.json_store import ALERTS_DOC, TRAFFIC_DOC, JsonStore
from peachmonitor.storage.models import AlertFlags, CumulativeTotals, RawCounterSample
from peachmonitor.traffic.accumulator import accumulate
from peachmonitor.traffic.counters import read_interface_counters

logger = logging.getLogger("peachmonitor.services.update_cycle")

CounterReader = Callable[[str], RawCounterSample]


@dataclass(frozen=True)
class CycleResult:
    """완료된 사이클의 결과. save 모드에서는 flags가 None이다."""
    totals: CumulativeTotals
    flags: AlertFlags | None = None


class UpdateCycle:
    """한 인터페이스에 대한 갱신 사이클과 저장 작업을 수행한다.

    traffic.json 저장과 alerts.json 저장은 각각 독립된 원자적 쓰기다.
    둘 사이에서 중단되면 플래그는 다음 사이클까지 이전 값으로 남지만,
    플래그는 항상 전체를 다시 계산하므로 문제되지 않는다.
    """

    def __init__(
        self,
        store: JsonStore,
        thresholds: ThresholdStore,
        iface: str,
        reader: CounterReader = read_interface_counters,
    ) -> None:
        """저장소, 임계값 저장소, 대상 인터페이스, 카운터 리더를 주입받는다."""
        self.store      = store
        self.thresholds = thresholds
        self.iface      = iface
        self.reader     = reader

    def _accumulate(self, prev: CumulativeTotals) -> CumulativeTotals:
        """샘플링 후 새 누적값을 저장한다. 샘플링 실패 시 아무것도 저장하지 않는다."""
        sample = self.reader(self.iface)
        totals = accumulate(prev, sample)
        self.store.save(TRAFFIC_DOC, totals)
        return totals

    def run(self) -> CycleResult:
        """누적값을 갱신하고 알림 플래그를 다시 계산해 저장한다."""
        prev       = self.store.load(TRAFFIC_DOC, CumulativeTotals)
        thresholds = self.thresholds.load()

        totals = self._accumulate(prev)
        flags  = evaluate(totals, thresholds)
        self.store.save(ALERTS_DOC, flags)

        logger.info(
            "Cycle complete on %s: rx=%d tx=%d flags=%s",
            self.iface, totals.rx_total, totals.tx_total, flags.to_dict(),
        )
        return CycleResult(totals=totals, flags=flags)

    def save(self) -> CycleResult:
        """누적값만 갱신해 저장한다. 임계값과 플래그는 건드리지 않는다.

        종료 직전 현재 세션의 마지막 원시 카운터를 반영하기 위해 사용된다.
        """
        prev   = self.store.load(TRAFFIC_DOC, CumulativeTotals)
        totals = self._accumulate(prev)
        logger.info(
            "Saved totals for %s: rx=%d tx=%d",
            self.iface, totals.rx_total, totals.tx_total,
        )
        return CycleResult(totals=totals)
