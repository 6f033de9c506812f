"""원자적 교체 쓰기를 사용하는 JSON 문서 저장소.

하나의 디렉터리에 traffic.json, thresholds.json, alerts.json 세 문서를 보관한다.
쓰기는 같은 디렉터리의 임시 파일에 기록한 뒤 os.replace로 교체하므로,
다른 프로세스의 읽기는 항상 완전한 이전 문서 또는 완전한 새 문서만 본다.
프로세스 간 잠금은 없으며 동시 쓰기는 마지막 쓰기가 이긴다.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol, TypeVar

from peachmonitor.errors import CorruptStoreError, StoreIOError
from peachmonitor.storage.models import DocumentError

logger = logging.getLogger("peachmonitor.storage.json_store")

TRAFFIC_DOC    = "traffic.json"
THRESHOLDS_DOC = "thresholds.json"
ALERTS_DOC     = "alerts.json"

# mkstemp은 0600으로 생성하므로 다른 사용자(대시보드 등)가 읽을 수 있게 교체 전에 변경
DOCUMENT_MODE = 0o644


class Document(Protocol):
    def to_dict(self) -> dict[str, Any]: ...

    @classmethod
    def from_dict(cls, data: Any) -> Any: ...


T = TypeVar("T", bound=Document)


class JsonStore:
    """고정 디렉터리의 이름 있는 JSON 문서에 대한 로드/저장."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory).expanduser()

    def path_for(self, name: str) -> Path:
        """문서 이름에 대응하는 파일 경로를 반환한다."""
        return self.directory / name

    def load(self, name: str, model: type[T]) -> T:
        """문서를 로드한다.

        파일이 없으면 (최초 실행) model의 기본값 인스턴스를 반환한다.
        파일이 있지만 파싱할 수 없으면 CorruptStoreError를 발생시키며
        절대 자동 복구하지 않는다.
        """
        path = self.path_for(name)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Document %s not found, using defaults", path)
            return model()
        except OSError as exc:
            raise StoreIOError(f"Cannot read {path}: {exc.strerror or exc}") from exc

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CorruptStoreError(str(path), f"invalid JSON ({exc})") from exc

        try:
            return model.from_dict(data)
        except DocumentError as exc:
            raise CorruptStoreError(str(path), str(exc)) from exc

    def save(self, name: str, value: Document) -> None:
        """문서를 원자적으로 저장한다 (임시 파일 기록 → fsync → os.replace)."""
        path    = self.path_for(name)
        payload = json.dumps(value.to_dict(), indent=2) + "\n"

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.directory, prefix=f".{name}.", suffix=".tmp",
            )
        except OSError as exc:
            raise StoreIOError(f"Cannot write {path}: {exc.strerror or exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                os.fchmod(f.fileno(), DOCUMENT_MODE)
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except OSError as exc:
            # 교체 전에 실패하면 이전 문서는 그대로 남는다
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise StoreIOError(f"Cannot write {path}: {exc.strerror or exc}") from exc

        logger.debug("Saved %s", path)
