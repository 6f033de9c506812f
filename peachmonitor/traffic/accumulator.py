"""카운터 리셋을 감지하며 재부팅을 넘어 누적 트래픽을 계산한다.

방향(rx, tx)별로 독립적으로 동일한 규칙을 적용한다:

- 연속: raw >= prev_raw 이면 세션이 이어진 것이므로 차이만큼 더한다.
- 리셋: raw < prev_raw 이면 인터페이스/머신이 재시작되어 카운터가 0부터
  다시 시작한 것이다. 리셋 이전 바이트는 이미 prev_total에 반영되어 있으므로
  새 세션의 진행분 raw 전체를 더한다.

부팅 ID를 사용하지 않으므로, 리셋 후 카운터가 prev_raw 이상까지 증가한 뒤
첫 샘플이 관측되면 연속으로 오인된다. 이는 알려진 한계로 남겨 둔다.
"""

from __future__ import annotations

import logging

from peachmonitor.storage.models import CumulativeTotals, RawCounterSample

logger = logging.getLogger("peachmonitor.traffic.accumulator")


def accumulate_direction(prev_total: int, prev_raw: int, raw: int) -> tuple[int, int]:
    """한 방향의 (새 누적값, 새 마지막 원시값)을 반환한다."""
    if raw >= prev_raw:
        return prev_total + (raw - prev_raw), raw
    return prev_total + raw, raw


def accumulate(prev: CumulativeTotals, sample: RawCounterSample) -> CumulativeTotals:
    """이전 누적값과 새 원시 샘플로 다음 CumulativeTotals를 계산한다 (순수 함수)."""
    if sample.rx_bytes < prev.last_raw_rx or sample.tx_bytes < prev.last_raw_tx:
        logger.info(
            "Counter reset detected (rx %d -> %d, tx %d -> %d)",
            prev.last_raw_rx, sample.rx_bytes, prev.last_raw_tx, sample.tx_bytes,
        )

    rx_total, last_rx = accumulate_direction(prev.rx_total, prev.last_raw_rx, sample.rx_bytes)
    tx_total, last_tx = accumulate_direction(prev.tx_total, prev.last_raw_tx, sample.tx_bytes)
    return CumulativeTotals(
        rx_total=rx_total,
        tx_total=tx_total,
        last_raw_rx=last_rx,
        last_raw_tx=last_tx,
    )
