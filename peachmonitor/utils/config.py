"""기본값 병합 기능을 갖춘 YAML 설정 로더."""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv


def _default_store_dir() -> str:
    """XDG 데이터 디렉터리 아래 peachcloud 경로를 반환한다."""
    data_home = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return str(Path(data_home) / "peachcloud")


_DEFAULTS: dict[str, Any] = {
    "monitor": {
        "iface": "wlan0",
        "interval_seconds": 60,
    },
    "store": {
        "directory": None,      # None → _default_store_dir()
    },
    "thresholds": {
        "unit": "B",
    },
    "logging": {
        "level": "INFO",
        "directory": None,      # None → 파일 로깅 비활성화
        "max_bytes": 10_485_760,
        "backup_count": 5,
        "format": "text",
    },
}

# 환경변수 → Config 경로 매핑
_ENV_OVERRIDES: list[tuple[str, str, type]] = [
    ("PEACHMONITOR_IFACE", "monitor.iface", str),
    ("PEACHMONITOR_INTERVAL", "monitor.interval_seconds", float),
    ("PEACHMONITOR_STORE_DIR", "store.directory", str),
    ("PEACHMONITOR_LOG_LEVEL", "logging.level", str),
    ("PEACHMONITOR_THRESHOLD_UNIT", "thresholds.unit", str),
]


def _deep_merge(base: dict, override: dict) -> dict:
    """override를 base에 재귀적으로 병합하여 새 dict를 반환한다."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _set_nested(data: dict, dotted_key: str, value: Any) -> None:
    """점 표기법을 사용하여 중첩 dict에 값을 설정한다."""
    keys = dotted_key.split(".")
    current = data
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], dict):
            current[key] = {}
        current = current[key]
    current[keys[-1]] = value


def _apply_env_overrides(data: dict) -> None:
    """환경변수가 설정되어 있으면 YAML 값을 오버라이드한다."""
    for env_var, config_path, cast in _ENV_OVERRIDES:
        value = os.environ.get(env_var)
        if value is not None:
            _set_nested(data, config_path, cast(value))


class Config:
    """내장 기본값 위에 YAML 파일을 병합한 설정 컨테이너."""

    def __init__(self, data: dict[str, Any], config_path: str | Path | None = None) -> None:
        self._data = data
        self.config_path: str | None = str(config_path) if config_path else None

    @classmethod
    def defaults(cls) -> Config:
        """설정 파일 없이 내장 기본값만으로 Config를 만든다."""
        data = copy.deepcopy(_DEFAULTS)
        _apply_env_overrides(data)
        return cls(data)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> Config:
        """YAML 파일에서 설정을 로드한다.

        명시적으로 지정한 경로가 없으면 환경변수 PEACHMONITOR_CONFIG,
        그 다음 프로젝트 루트 기준 config/default.yaml을 사용한다.
        명시적 경로가 존재하지 않으면 FileNotFoundError, 암묵적 기본 경로가
        없으면 내장 기본값을 사용한다.
        .env 파일이 존재하면 자동으로 로드하여 환경변수를 설정한다.
        """
        load_dotenv()

        explicit = config_path is not None
        if config_path is None:
            config_path = os.environ.get("PEACHMONITOR_CONFIG")
            explicit = config_path is not None
        if config_path is None:
            project_root = Path(__file__).resolve().parent.parent.parent
            config_path = project_root / "config" / "default.yaml"

        config_path = Path(config_path)
        if not config_path.exists():
            if explicit:
                raise FileNotFoundError(f"Config file not found: {config_path}")
            return cls.defaults()

        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        inner  = data.get("peachmonitor", data)
        merged = _deep_merge(copy.deepcopy(_DEFAULTS), inner)
        _apply_env_overrides(merged)

        return cls(merged, config_path=config_path)

    def get(self, dotted_key: str, default: Any = None) -> Any:
        """점 표기법으로 값을 조회한다: 'monitor.iface' -> config['monitor']['iface']."""
        keys = dotted_key.split(".")
        current = self._data
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    def set(self, dotted_key: str, value: Any) -> None:
        """CLI 인자 등으로 값을 덮어쓴다."""
        _set_nested(self._data, dotted_key, value)

    @property
    def store_directory(self) -> Path:
        """문서 저장 디렉터리. 설정되지 않았으면 XDG 기본 경로."""
        directory = self.get("store.directory") or _default_store_dir()
        return Path(directory).expanduser()
