"""트래픽 누적값, 임계값, 알림 플래그 문서 모델."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

U64_MAX = 2**64 - 1


class DocumentError(ValueError):
    """문서 필드가 기대한 형태가 아니다."""


def _u64(data: dict[str, Any], key: str) -> int:
    """부호 없는 64비트 정수 필드를 읽는다. 없으면 0."""
    value = data.get(key, 0)
    # bool은 int의 하위 타입이므로 명시적으로 거부
    if isinstance(value, bool) or not isinstance(value, int):
        raise DocumentError(f"field '{key}' must be an unsigned integer, got {value!r}")
    if value < 0 or value > U64_MAX:
        raise DocumentError(f"field '{key}' out of u64 range: {value}")
    return value


def _flag(data: dict[str, Any], key: str) -> bool:
    """불리언 플래그 필드를 읽는다. 없으면 False."""
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise DocumentError(f"field '{key}' must be a boolean, got {value!r}")
    return value


def _require_object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DocumentError(f"document must be a JSON object, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class RawCounterSample:
    """현재 부팅 세션의 커널 인터페이스 카운터 (저장하지 않음)."""
    rx_bytes: int
    tx_bytes: int


@dataclass(frozen=True)
class CumulativeTotals:
    """재부팅을 넘어 누적된 송수신 바이트 (traffic.json).

    last_raw_rx / last_raw_tx는 현재 세션에서 마지막으로 관측한 원시 카운터로,
    카운터 리셋 감지에 사용된다.
    """
    rx_total: int = 0
    tx_total: int = 0
    last_raw_rx: int = 0
    last_raw_tx: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "rxTotal": self.rx_total,
            "txTotal": self.tx_total,
            "lastRawRx": self.last_raw_rx,
            "lastRawTx": self.last_raw_tx,
        }

    @classmethod
    def from_dict(cls, data: Any) -> CumulativeTotals:
        data = _require_object(data)
        return cls(
            rx_total=_u64(data, "rxTotal"),
            tx_total=_u64(data, "txTotal"),
            last_raw_rx=_u64(data, "lastRawRx"),
            last_raw_tx=_u64(data, "lastRawTx"),
        )


@dataclass(frozen=True)
class Thresholds:
    """사용자가 설정한 경고/위험 바이트 임계값 (thresholds.json)."""
    rx_warn: int = 0
    rx_crit: int = 0
    tx_warn: int = 0
    tx_crit: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "rxWarn": self.rx_warn,
            "rxCrit": self.rx_crit,
            "txWarn": self.tx_warn,
            "txCrit": self.tx_crit,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Thresholds:
        data = _require_object(data)
        return cls(
            rx_warn=_u64(data, "rxWarn"),
            rx_crit=_u64(data, "rxCrit"),
            tx_warn=_u64(data, "txWarn"),
            tx_crit=_u64(data, "txCrit"),
        )

    def scaled(self, factor: int) -> Thresholds:
        """모든 임계값에 단위 배수를 곱한 새 인스턴스를 반환한다."""
        if factor == 1:
            return self
        return Thresholds(**{f.name: getattr(self, f.name) * factor for f in fields(self)})


@dataclass(frozen=True)
class AlertFlags:
    """임계값 평가 결과 스냅샷 (alerts.json). 매 사이클 전체를 덮어쓴다."""
    rx_warn: bool = False
    rx_crit: bool = False
    tx_warn: bool = False
    tx_crit: bool = False

    def to_dict(self) -> dict[str, bool]:
        return {
            "rxWarn": self.rx_warn,
            "rxCrit": self.rx_crit,
            "txWarn": self.tx_warn,
            "txCrit": self.tx_crit,
        }

    @classmethod
    def from_dict(cls, data: Any) -> AlertFlags:
        data = _require_object(data)
        return cls(
            rx_warn=_flag(data, "rxWarn"),
            rx_crit=_flag(data, "rxCrit"),
            tx_warn=_flag(data, "txWarn"),
            tx_crit=_flag(data, "txCrit"),
        )
