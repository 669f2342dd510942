#!/usr/bin/env python3
from __future__ import annotations

from pathlib import Path
import sys
from typing import List

import yaml

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from workbench.registry import MANIFEST_NAME, MODULES_PATH, normalize_mount  # noqa: E402

REQUIRED_FIELDS = ("title", "version", "description", "category")


def check_modules(modules_dir: Path = MODULES_PATH) -> List[str]:
    errors: List[str] = []
    mounts: dict[str, str] = {}
    names: set[str] = set()

    for module_dir in sorted(modules_dir.iterdir()):
        manifest = module_dir / MANIFEST_NAME
        if not module_dir.is_dir() or not manifest.exists():
            continue
        try:
            data = yaml.safe_load(manifest.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            errors.append(f"{module_dir.name}: invalid YAML ({exc})")
            continue
        if not isinstance(data, dict):
            errors.append(f"{module_dir.name}: manifest must be a mapping")
            continue

        name = str(data.get("name") or "").strip() or module_dir.name
        if name in names:
            errors.append(f"{module_dir.name}: duplicate name '{name}'")
        names.add(name)

        for field in REQUIRED_FIELDS:
            if not str(data.get(field) or "").strip():
                errors.append(f"{module_dir.name}: missing {field}")

        public = data.get("public")
        entrypoints = data.get("entrypoints") or {}
        api = entrypoints.get("api") if isinstance(entrypoints, dict) else None
        if public is None or public:
            if not api:
                errors.append(f"{module_dir.name}: missing entrypoints.api")
            elif ":" not in str(api):
                errors.append(f"{module_dir.name}: entrypoints.api must be module:app")

        mount = normalize_mount(name, data.get("mount"))
        if mount == "/":
            errors.append(f"{module_dir.name}: mount '/' is reserved")
        if " " in mount:
            errors.append(f"{module_dir.name}: mount contains spaces")
        if mount in mounts:
            errors.append(f"{module_dir.name}: mount '{mount}' duplicates {mounts[mount]}")
        else:
            mounts[mount] = name

    return errors


def main() -> int:
    errors = check_modules()
    if errors:
        print("Module sanity check failed:\n")
        for issue in errors:
            print(f"- {issue}")
        return 1

    print("Module sanity check passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
