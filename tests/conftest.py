"""Shared fixtures for PeachMonitor tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from peachmonitor.alerts.thresholds import ThresholdStore
from peachmonitor.errors import InterfaceUnavailableError
from peachmonitor.services.update_cycle import UpdateCycle
from peachmonitor.storage.json_store import JsonStore
from peachmonitor.storage.models import RawCounterSample
from peachmonitor.utils.config import Config


class FakeCounters:
    """미리 정한 샘플을 순서대로 반환하는 카운터 리더.

    None 항목은 인터페이스 부재로 취급하여 InterfaceUnavailableError를 발생시킨다.
    마지막 샘플 이후에는 마지막 값을 반복한다.
    """

    def __init__(self, *samples: tuple[int, int] | None) -> None:
        self.samples = list(samples)
        self.calls: list[str] = []

    def __call__(self, iface: str) -> RawCounterSample:
        self.calls.append(iface)
        idx = min(len(self.calls), len(self.samples)) - 1
        sample = self.samples[idx]
        if sample is None:
            raise InterfaceUnavailableError(iface, "no such interface")
        return RawCounterSample(rx_bytes=sample[0], tx_bytes=sample[1])


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """호스트 환경변수가 설정 로드에 섞이지 않도록 제거한다.
    Config.load의 load_dotenv()가 개발자 .env에서 값을 다시 채우므로 함께 비활성화한다.
    """
    monkeypatch.setattr("peachmonitor.utils.config.load_dotenv", lambda *args, **kwargs: False)
    for var in (
        "PEACHMONITOR_CONFIG",
        "PEACHMONITOR_IFACE",
        "PEACHMONITOR_INTERVAL",
        "PEACHMONITOR_STORE_DIR",
        "PEACHMONITOR_LOG_LEVEL",
        "PEACHMONITOR_THRESHOLD_UNIT",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    return tmp_path / "store"


@pytest.fixture
def config(tmp_path: Path, store_dir: Path) -> Config:
    """Config pointing to a test-specific store directory."""
    yaml_content = f"""
peachmonitor:
  monitor:
    iface: test0
    interval_seconds: 0.01
  store:
    directory: "{store_dir}"
  thresholds:
    unit: B
  logging:
    level: DEBUG
    directory: "{tmp_path / 'logs'}"
"""
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(yaml_content)
    return Config.load(config_file)


@pytest.fixture
def store(store_dir: Path) -> JsonStore:
    return JsonStore(store_dir)


@pytest.fixture
def thresholds(store: JsonStore) -> ThresholdStore:
    return ThresholdStore(store)


@pytest.fixture
def make_cycle(store: JsonStore, thresholds: ThresholdStore):
    """주어진 샘플 시퀀스로 UpdateCycle을 생성하는 팩토리."""

    def _make(*samples: tuple[int, int] | None) -> UpdateCycle:
        return UpdateCycle(store, thresholds, "test0", reader=FakeCounters(*samples))

    return _make


@pytest.fixture
def fake_counters() -> type[FakeCounters]:
    return FakeCounters
