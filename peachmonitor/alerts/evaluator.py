"""누적 트래픽과 임계값으로 알림 플래그를 계산한다."""

from __future__ import annotations

from peachmonitor.storage.models import AlertFlags, CumulativeTotals, Thresholds


def evaluate(totals: CumulativeTotals, thresholds: Thresholds) -> AlertFlags:
    """임계값 이상(>=)이면 해당 플래그를 설정한다.

    네 플래그는 서로 독립적인 비트다. warn > crit 으로 잘못 설정되어도
    특별 처리 없이 비교 결과를 그대로 반환한다.
    """
    return AlertFlags(
        rx_warn=totals.rx_total >= thresholds.rx_warn,
        rx_crit=totals.rx_total >= thresholds.rx_crit,
        tx_warn=totals.tx_total >= thresholds.tx_warn,
        tx_crit=totals.tx_total >= thresholds.tx_crit,
    )
