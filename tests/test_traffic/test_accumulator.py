"""누적기 연속/리셋 처리 테스트."""

from __future__ import annotations

from peachmonitor.storage.models import CumulativeTotals, RawCounterSample
from peachmonitor.traffic.accumulator import accumulate, accumulate_direction


class TestAccumulateDirection:
    def test_continuity_adds_delta(self):
        assert accumulate_direction(1000, 400, 650) == (1250, 650)

    def test_equal_sample_adds_nothing(self):
        assert accumulate_direction(1000, 400, 400) == (1000, 400)

    def test_reset_adds_new_session(self):
        assert accumulate_direction(500, 500, 300) == (800, 300)

    def test_reset_to_zero(self):
        assert accumulate_direction(500, 500, 0) == (500, 0)


class TestAccumulate:
    def test_first_run(self):
        totals = accumulate(CumulativeTotals(), RawCounterSample(rx_bytes=500, tx_bytes=100))
        assert totals == CumulativeTotals(rx_total=500, tx_total=100, last_raw_rx=500, last_raw_tx=100)

    def test_reset_scenario(self):
        prev = CumulativeTotals(rx_total=500, tx_total=100, last_raw_rx=500, last_raw_tx=100)
        totals = accumulate(prev, RawCounterSample(rx_bytes=300, tx_bytes=150))
        assert totals.rx_total == 800
        assert totals.last_raw_rx == 300
        # tx는 독립적으로 연속 처리
        assert totals.tx_total == 150
        assert totals.last_raw_tx == 150

    def test_telescoping_sum_independent_of_granularity(self):
        raws = [0, 10, 10, 250, 1000, 4096, 4097]
        start = CumulativeTotals(rx_total=42, tx_total=7)

        fine = start
        for r in raws:
            fine = accumulate(fine, RawCounterSample(rx_bytes=r, tx_bytes=r * 2))

        coarse = accumulate(start, RawCounterSample(rx_bytes=raws[-1], tx_bytes=raws[-1] * 2))

        assert fine.rx_total == 42 + raws[-1]
        assert fine.tx_total == 7 + raws[-1] * 2
        assert fine == coarse

    def test_multiple_reboots(self):
        totals = CumulativeTotals()
        # 세션 1: 0 → 1000, 세션 2: 0 → 200 → 700, 세션 3: 0 → 50
        for rx in (400, 1000, 200, 700, 50):
            totals = accumulate(totals, RawCounterSample(rx_bytes=rx, tx_bytes=0))
        assert totals.rx_total == 1000 + 700 + 50
        assert totals.last_raw_rx == 50

    def test_totals_never_below_last_raw(self):
        totals = CumulativeTotals()
        for rx, tx in [(10, 5), (3, 9), (100, 1), (0, 0), (7, 70)]:
            totals = accumulate(totals, RawCounterSample(rx_bytes=rx, tx_bytes=tx))
            assert totals.rx_total >= totals.last_raw_rx
            assert totals.tx_total >= totals.last_raw_tx

    def test_does_not_mutate_input(self):
        prev = CumulativeTotals(rx_total=1, tx_total=1, last_raw_rx=1, last_raw_tx=1)
        accumulate(prev, RawCounterSample(rx_bytes=5, tx_bytes=5))
        assert prev == CumulativeTotals(rx_total=1, tx_total=1, last_raw_rx=1, last_raw_tx=1)
