from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ROOT_DIR = Path(__file__).resolve().parents[1]


def _parse_mapping(raw: str | None) -> Dict[str, int]:
    """Parse ``name=value,name=value`` into a mapping, skipping bad chunks."""
    if not raw:
        return {}
    mapping: Dict[str, int] = {}
    for chunk in raw.split(","):
        if "=" not in chunk:
            continue
        key, value = chunk.split("=", 1)
        key = key.strip()
        if not key:
            continue
        try:
            mapping[key] = int(value.strip())
        except ValueError:
            continue
    return mapping


class WorkbenchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WORKBENCH_",
        env_file=".env",
        extra="ignore",
    )

    env: str = "dev"
    log_level: str = "INFO"
    log_json: bool = True

    shared_templates: Path | None = None

    # <= 0 disables the limit
    max_body_bytes: int = 5_000_000
    request_timeout_seconds: float = 15.0
    # name=value,name=value per module
    module_max_body_bytes: str = ""
    module_timeouts: str = ""

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v):
        return str(v or "INFO").strip().upper()

    def body_limit(self) -> int | None:
        return self.max_body_bytes if self.max_body_bytes > 0 else None

    def module_body_overrides(self) -> Dict[str, int]:
        return _parse_mapping(self.module_max_body_bytes)

    def module_timeout_overrides(self) -> Dict[str, int]:
        return _parse_mapping(self.module_timeouts)

    def timeout_limit(self) -> float | None:
        if self.request_timeout_seconds <= 0:
            return None
        return self.request_timeout_seconds


@lru_cache()
def get_settings() -> WorkbenchSettings:
    return WorkbenchSettings()


def shared_templates_dir(root_dir: Path = ROOT_DIR) -> Path:
    configured = get_settings().shared_templates
    if configured:
        return Path(configured)
    return root_dir / "workbench" / "templates"
