from __future__ import annotations

import runpy
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
for package_dir in ("packages/renderer", "packages/core", "apps/cli"):
    sys.path.insert(0, str(ROOT / package_dir))

import statcard_app.__main__ as cli_main


def test_main_defaults_to_render(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(cli_main, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)

    rc = cli_main.main([])
    assert rc == 0
    assert calls == [["render"]]


def test_main_passes_through_args(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(cli_main, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)

    rc = cli_main.main(["compare", "a", "b", "--hashes"])
    assert rc == 0
    assert calls == [["compare", "a", "b", "--hashes"]]


def test_main_module_runpath_without_package_context() -> None:
    main_path = ROOT / "apps" / "cli" / "statcard_app" / "__main__.py"
    result = runpy.run_path(str(main_path))
    assert "main" in result
