from __future__ import annotations

from importlib import import_module
from pathlib import Path
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
import structlog

from workbench.errors import install_error_handlers
from workbench.limits import RequestLimitsMiddleware
from workbench.logger import setup_logger
from workbench.registry import MODULES_PATH, load_modules, mount_map
from workbench.settings import get_settings

logger = structlog.get_logger(__name__)

CATEGORY_DESCRIPTIONS = {
    "Text": "Reshape and measure text: casing styles, separators, counts.",
    "Other": "Useful modules that do not fit a core category.",
}
DEFAULT_CATEGORY_DESCRIPTION = "Practical utilities for quick tasks."


def _slugify(value: str) -> str:
    return value.strip().lower().replace(" ", "-")


def build_categories(modules: Dict[str, Dict[str, Any]]) -> List[Dict[str, Any]]:
    grouped: Dict[str, List[Dict[str, Any]]] = {}
    for module in modules.values():
        if not module.get("public", True):
            continue
        grouped.setdefault(str(module.get("category") or "Other"), []).append(module)

    categories: List[Dict[str, Any]] = []
    for category, items in sorted(grouped.items(), key=lambda item: item[0].lower()):
        items.sort(key=lambda item: item.get("title") or item.get("name", ""))
        categories.append(
            {
                "name": category,
                "slug": _slugify(category),
                "description": CATEGORY_DESCRIPTIONS.get(
                    category, DEFAULT_CATEGORY_DESCRIPTION
                ),
                "modules": items,
            }
        )
    return categories


def import_attr(path: str) -> Any:
    if ":" not in path:
        raise ValueError(f"Invalid entrypoint '{path}'. Expected module:attr.")
    module_path, attr = path.split(":", 1)
    module = import_module(module_path)
    return getattr(module, attr)


def build_app(modules_path: Path = MODULES_PATH) -> FastAPI:
    settings = get_settings()
    setup_logger()

    modules = load_modules(modules_path)
    app = FastAPI(title="Text Case Workbench")
    install_error_handlers(app)

    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

    @app.get("/", response_class=HTMLResponse)
    def workbench_index(request: Request):
        base_path = request.scope.get("root_path", "").rstrip("/")
        return templates.TemplateResponse(
            request,
            "index.html",
            {"categories": build_categories(modules), "base_path": base_path},
        )

    @app.get("/modules")
    def list_modules():
        return [
            {
                "name": meta["name"],
                "title": meta.get("title") or meta["name"],
                "category": meta["category"],
                "mount": meta["mount"],
            }
            for meta in modules.values()
            if meta.get("public", True)
        ]

    @app.get("/category/{slug}", response_class=HTMLResponse)
    def category_index(request: Request, slug: str):
        category = next(
            (item for item in build_categories(modules) if item["slug"] == slug),
            None,
        )
        if not category:
            raise HTTPException(status_code=404, detail="Category not found")
        base_path = request.scope.get("root_path", "").rstrip("/")
        return templates.TemplateResponse(
            request,
            "category.html",
            {"category": category, "base_path": base_path},
        )

    for meta in modules.values():
        api_entry = (meta.get("entrypoints") or {}).get("api")
        if not api_entry:
            continue
        try:
            subapp = import_attr(api_entry)
        except Exception:
            logger.exception("workbench.mount_failed", module=meta["name"], entry=api_entry)
            continue
        app.mount(meta["mount"], subapp)
        logger.info("workbench.mounted", module=meta["name"], mount=meta["mount"])

    app.add_middleware(
        RequestLimitsMiddleware,
        mount_map=mount_map(modules),
        settings=settings,
    )
    return app
