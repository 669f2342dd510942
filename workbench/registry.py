from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import Any, Dict

import structlog
import yaml

logger = structlog.get_logger(__name__)

MODULES_PATH = Path(__file__).parent.parent / "modules"
ENTRYPOINT_GROUP = "workbench.modules"
MANIFEST_NAME = "module.yaml"


def normalize_mount(name: str, raw: str | None) -> str:
    mount = raw or f"/{name.replace('_', '-')}"
    if not mount.startswith("/"):
        mount = "/" + mount
    if mount != "/" and mount.endswith("/"):
        mount = mount.rstrip("/")
    return mount


def _normalize_module(
    data: Dict[str, Any],
    *,
    source: str,
    path: Path | None = None,
    entry_point: str | None = None,
) -> Dict[str, Any] | None:
    name = data.get("name")
    if not name:
        return None

    slug = data.get("slug") or name.replace("_", "-")
    public = data.get("public")

    normalized = {**data}
    normalized.update(
        {
            "name": name,
            "slug": slug,
            "mount": normalize_mount(name, data.get("mount") or f"/{slug}"),
            "public": True if public is None else bool(public),
            "category": data.get("category") or "Other",
            "source": source,
        }
    )
    if path is not None:
        normalized["path"] = path
    if entry_point is not None:
        normalized["entry_point"] = entry_point
    return normalized


def load_filesystem_modules(modules_path: Path = MODULES_PATH) -> Dict[str, Dict[str, Any]]:
    modules: Dict[str, Dict[str, Any]] = {}
    if not modules_path.exists():
        return modules

    for module_dir in sorted(modules_path.iterdir()):
        manifest = module_dir / MANIFEST_NAME
        if not module_dir.is_dir() or not manifest.exists():
            continue
        with open(manifest, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            logger.warning("registry.bad_manifest", path=str(manifest))
            continue
        normalized = _normalize_module(data, source="filesystem", path=module_dir)
        if normalized:
            modules[normalized["name"]] = normalized
    return modules


def load_entrypoint_modules(group: str = ENTRYPOINT_GROUP) -> Dict[str, Dict[str, Any]]:
    modules: Dict[str, Dict[str, Any]] = {}
    for entry in metadata.entry_points(group=group):
        try:
            obj = entry.load()
        except Exception:
            logger.warning("registry.entry_point_failed", entry_point=entry.name, exc_info=True)
            continue

        data = obj() if callable(obj) else obj
        if not isinstance(data, dict):
            continue

        normalized = _normalize_module(data, source="entry_point", entry_point=entry.name)
        if normalized:
            modules[normalized["name"]] = normalized
    return modules


def load_modules(modules_path: Path = MODULES_PATH) -> Dict[str, Dict[str, Any]]:
    """Filesystem manifests win over installed entry points with the same name."""
    modules = load_filesystem_modules(modules_path)
    for name, data in load_entrypoint_modules().items():
        modules.setdefault(name, data)
    return modules


def mount_map(modules: Dict[str, Dict[str, Any]]) -> Dict[str, str]:
    return {meta["mount"]: name for name, meta in modules.items()}
