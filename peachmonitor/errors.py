"""PeachMonitor 예외 계층."""

from __future__ import annotations


class PeachMonitorError(Exception):
    """모든 PeachMonitor 오류의 기반 클래스. CLI 종료 코드를 함께 가진다."""

    exit_code = 1


class InterfaceUnavailableError(PeachMonitorError):
    """네트워크 인터페이스가 없거나 카운터를 읽을 수 없다."""

    exit_code = 2

    def __init__(self, iface: str, reason: str = "") -> None:
        self.iface = iface
        msg = f"Network interface '{iface}' is unavailable"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class CorruptStoreError(PeachMonitorError):
    """저장된 문서가 존재하지만 파싱할 수 없다. 자동 복구하지 않는다."""

    exit_code = 3

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Corrupt store document {path}: {reason}")


class StoreIOError(PeachMonitorError, OSError):
    """저장소 파일시스템 I/O 실패 (디스크 부족, 권한 거부 등)."""

    exit_code = 4
