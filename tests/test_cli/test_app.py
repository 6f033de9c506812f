"""PeachMonitor 오케스트레이터 테스트."""

from __future__ import annotations

import asyncio
import os
import signal
from pathlib import Path

import pytest

from peachmonitor.app import PeachMonitor
from peachmonitor.errors import CorruptStoreError
from peachmonitor.services.scheduler import SchedulerState
from peachmonitor.storage.json_store import ALERTS_DOC, THRESHOLDS_DOC, TRAFFIC_DOC
from peachmonitor.storage.models import Thresholds
from peachmonitor.utils.config import Config


class TestPeachMonitor:
    def test_wires_config(self, config: Config, store_dir: Path, fake_counters):
        app = PeachMonitor(config, reader=fake_counters((1, 1)))
        assert app.iface == "test0"
        assert app.store.directory == store_dir
        assert app.scheduler.interval == 0.01

    def test_update_and_snapshot(self, config: Config, fake_counters):
        reader = fake_counters((500, 100))
        app = PeachMonitor(config, reader=reader)
        app.store.save(THRESHOLDS_DOC, Thresholds(rx_warn=500, rx_crit=5000, tx_warn=200, tx_crit=300))

        app.update()

        assert reader.calls == ["test0"]
        assert app.snapshot() == {
            "traffic": {"rxTotal": 500, "txTotal": 100, "lastRawRx": 500, "lastRawTx": 100},
            "thresholds": {"rxWarn": 500, "rxCrit": 5000, "txWarn": 200, "txCrit": 300},
            "alerts": {"rxWarn": True, "rxCrit": False, "txWarn": False, "txCrit": False},
        }

    def test_snapshot_does_not_mutate(self, config: Config, store_dir: Path, fake_counters):
        app = PeachMonitor(config, reader=fake_counters((1, 1)))
        snap = app.snapshot()
        assert snap["traffic"]["rxTotal"] == 0
        assert not store_dir.exists()

    def test_snapshot_reports_raw_threshold_values(self, config: Config, fake_counters):
        config.set("thresholds.unit", "KB")
        app = PeachMonitor(config, reader=fake_counters((1, 1)))
        app.store.save(THRESHOLDS_DOC, Thresholds(rx_warn=2))
        assert app.snapshot()["thresholds"]["rxWarn"] == 2
        assert app.thresholds.load().rx_warn == 2048

    def test_save_does_not_write_alerts(self, config: Config, fake_counters):
        app = PeachMonitor(config, reader=fake_counters((9, 9)))
        app.save()
        assert app.store.path_for(TRAFFIC_DOC).is_file()
        assert not app.store.path_for(ALERTS_DOC).is_file()

    def test_invalid_unit_rejected(self, config: Config, fake_counters):
        config.set("thresholds.unit", "parsecs")
        with pytest.raises(ValueError):
            PeachMonitor(config, reader=fake_counters((1, 1)))


@pytest.mark.asyncio
async def test_daemon_stops_on_sigterm(config: Config, fake_counters):
    app = PeachMonitor(config, reader=fake_counters((10, 10), (20, 20)))
    loop = asyncio.get_running_loop()
    loop.call_later(0.1, os.kill, os.getpid(), signal.SIGTERM)

    await asyncio.wait_for(app.run_daemon(), timeout=5.0)

    assert app.scheduler.state == SchedulerState.STOPPED
    assert app.scheduler.cycles_completed >= 1
    assert app.snapshot()["traffic"]["rxTotal"] == 20


@pytest.mark.asyncio
async def test_daemon_corrupt_store_propagates(config: Config, store_dir: Path, fake_counters):
    store_dir.mkdir()
    (store_dir / TRAFFIC_DOC).write_text("{")
    app = PeachMonitor(config, reader=fake_counters((1, 1)))

    with pytest.raises(CorruptStoreError):
        await asyncio.wait_for(app.run_daemon(), timeout=5.0)
    assert (store_dir / TRAFFIC_DOC).read_text() == "{"
