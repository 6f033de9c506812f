"""psutil 기반 인터페이스별 원시 바이트 카운터 조회."""

from __future__ import annotations

import psutil

from peachmonitor.errors import InterfaceUnavailableError
from peachmonitor.storage.models import RawCounterSample


def read_interface_counters(iface: str) -> RawCounterSample:
    """현재 부팅 세션에서 iface의 누적 송수신 바이트를 읽는다.

    Raises:
        InterfaceUnavailableError: 인터페이스가 없거나 카운터를 읽을 수 없는 경우
    """
    try:
        pernic = psutil.net_io_counters(pernic=True)
    except OSError as exc:
        raise InterfaceUnavailableError(iface, str(exc)) from exc

    stats = pernic.get(iface)
    if stats is None:
        raise InterfaceUnavailableError(iface, "no such interface")
    return RawCounterSample(rx_bytes=stats.bytes_recv, tx_bytes=stats.bytes_sent)
