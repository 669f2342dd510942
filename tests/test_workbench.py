from pathlib import Path

from scripts.module_sanity import check_modules
from workbench.limits import LimitPolicy, policy_for, resolve_module
from workbench.registry import load_filesystem_modules, load_modules, normalize_mount
from workbench.settings import WorkbenchSettings


def _write_manifest(root: Path, dirname: str, body: str) -> None:
    module_dir = root / dirname
    module_dir.mkdir()
    (module_dir / "module.yaml").write_text(body, encoding="utf-8")


def test_normalize_mount():
    assert normalize_mount("text_case", None) == "/text-case"
    assert normalize_mount("x", "tools/x/") == "/tools/x"
    assert normalize_mount("x", "/") == "/"


def test_load_modules_finds_text_case():
    modules = load_modules()
    meta = modules["text_case"]
    assert meta["mount"] == "/text-case"
    assert meta["entrypoints"]["api"] == "modules.text_case.tool.app:app"
    assert meta["source"] == "filesystem"


def test_load_filesystem_modules_skips_bad_entries(tmp_path):
    _write_manifest(tmp_path, "good", "name: good\ntitle: Good\n")
    _write_manifest(tmp_path, "listy", "- not\n- a mapping\n")
    _write_manifest(tmp_path, "nameless", "title: Nameless\n")
    (tmp_path / "no_manifest").mkdir()

    modules = load_filesystem_modules(tmp_path)
    assert list(modules) == ["good"]
    assert modules["good"]["mount"] == "/good"
    assert modules["good"]["public"] is True
    assert modules["good"]["category"] == "Other"


def test_settings_parse_module_overrides(monkeypatch):
    monkeypatch.setenv("WORKBENCH_MODULE_TIMEOUTS", "text_case=5,broken,=3,other=x")
    settings = WorkbenchSettings()
    assert settings.module_timeout_overrides() == {"text_case": 5}
    assert settings.module_body_overrides() == {}


def test_settings_non_positive_limits_disable():
    settings = WorkbenchSettings(max_body_bytes=0, request_timeout_seconds=-1)
    assert settings.body_limit() is None
    assert settings.timeout_limit() is None


def test_policy_for_prefers_module_overrides():
    settings = WorkbenchSettings(
        max_body_bytes=100,
        request_timeout_seconds=0,
        module_max_body_bytes="text_case=10,open=0",
    )
    assert policy_for("text_case", settings) == LimitPolicy(max_body=10, timeout_seconds=None)
    assert policy_for("elsewhere", settings) == LimitPolicy(max_body=100, timeout_seconds=None)
    assert policy_for("open", settings).unlimited


def test_resolve_module_uses_longest_mount():
    mounts = {"/text": "short", "/text-case": "text_case"}
    assert resolve_module("/text-case/convert", "", mounts) == "text_case"
    assert resolve_module("/text/x", "", mounts) == "short"
    assert resolve_module("/docs", "", mounts) is None
    assert resolve_module("/convert", "/text-case/", mounts) == "text_case"


def test_repository_manifests_are_sane():
    assert check_modules() == []


def test_sanity_flags_duplicates_and_missing_fields(tmp_path):
    _write_manifest(
        tmp_path,
        "one",
        "name: one\ntitle: One\nversion: 1\ndescription: d\ncategory: Text\n"
        "entrypoints:\n  api: pkg.one:app\nmount: /shared\n",
    )
    _write_manifest(
        tmp_path,
        "two",
        "name: two\nentrypoints:\n  api: pkg.two\nmount: /shared\n",
    )
    errors = check_modules(tmp_path)
    assert "two: missing title" in errors
    assert "two: entrypoints.api must be module:app" in errors
    assert "two: mount '/shared' duplicates one" in errors
    assert not any(error.startswith("one:") for error in errors)
