from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates

from modules.text_case.core.convert import (
    EMPTY_INPUT_ERROR,
    SAMPLE_TEXT,
    convert_text,
    export_conversions,
)
from modules.text_case.core.stats import stats
from modules.text_case.core.tokenize import is_blank
from modules.text_case.core.variants import list_case_types
from workbench.errors import install_error_handlers
from workbench.settings import shared_templates_dir

app = FastAPI(title="Text Case Converter")
install_error_handlers(app)

BASE_DIR = Path(__file__).parent
ROOT_DIR = BASE_DIR.parents[2]
SHARED_TEMPLATES = shared_templates_dir(ROOT_DIR)
EXPORT_FILENAME = "converted-text.txt"

templates = Jinja2Templates(
    directory=[str(BASE_DIR / "templates"), str(SHARED_TEMPLATES)]
)


def _rejected(error: str) -> JSONResponse:
    # The UI clears its result grid on an empty conversion set.
    return JSONResponse({"error": error, "conversions": {}}, status_code=400)


@app.get("/", response_class=HTMLResponse)
def index(request: Request):
    base_path = request.scope.get("root_path", "").rstrip("/")
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "base_path": base_path,
            "case_types": list_case_types(),
            "sample_text": SAMPLE_TEXT,
        },
    )


@app.get("/case-types")
def case_types():
    return list_case_types()


@app.get("/sample")
def sample():
    return {"text": SAMPLE_TEXT}


@app.post("/convert")
def convert(
    text: str | None = Form(None),
    seed: str | None = Form(None),
):
    result, error = convert_text(text, seed=seed)
    if error:
        return _rejected(error)
    return result


@app.post("/stats")
def text_stats(text: str | None = Form(None)):
    if text is None or is_blank(text):
        return JSONResponse({"error": EMPTY_INPUT_ERROR}, status_code=400)
    return stats(text)._asdict()


@app.post("/export")
def export(
    text: str | None = Form(None),
    seed: str | None = Form(None),
):
    result, error = convert_text(text, seed=seed)
    if error or result is None:
        return _rejected(error or EMPTY_INPUT_ERROR)
    return PlainTextResponse(
        export_conversions(result["conversions"]),
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
