"""thresholds.json 읽기 전용 접근."""

from __future__ import annotations

from peachmonitor.storage.json_store import THRESHOLDS_DOC, JsonStore
from peachmonitor.storage.models import Thresholds

# 1024 기반 크기 단위
SIZE_UNITS: dict[str, int] = {
    "B": 1,
    "KB": 1024,
    "MB": 1024**2,
    "GB": 1024**3,
}


def unit_factor(unit: str) -> int:
    """단위 이름을 바이트 배수로 변환한다. 알 수 없는 단위면 ValueError."""
    try:
        return SIZE_UNITS[unit.upper()]
    except KeyError:
        raise ValueError(
            f"Unknown threshold unit '{unit}' (expected one of {', '.join(SIZE_UNITS)})"
        ) from None


class ThresholdStore:
    """사용자가 작성한 임계값을 바이트 단위로 제공한다.

    파일이 없으면 모든 임계값이 0이 되어 어떤 트래픽이든 경고와 위험을
    모두 충족한다. 미설정 시스템은 실제 임계값이 설정될 때까지 가장
    보수적으로 동작한다.
    """

    def __init__(self, store: JsonStore, unit: str = "B") -> None:
        self.store   = store
        self.unit    = unit.upper()
        self._factor = unit_factor(unit)

    def load(self) -> Thresholds:
        """설정 단위를 적용한 임계값을 반환한다."""
        return self.store.load(THRESHOLDS_DOC, Thresholds).scaled(self._factor)
