from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console
from typer.testing import CliRunner

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from kirit.core.store import StoragePaths, Stores, init_storage  # noqa: E402

CONSOLE_MODULES = (
    "kirit.core.console",
    "kirit.main",
    "kirit.ui.render",
    "kirit.commands.notes",
    "kirit.commands.todos",
    "kirit.commands.ideas",
    "kirit.commands.utility",
)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def isolate_config(tmp_path: Path, monkeypatch: Any) -> Path:
    """Point config to a temp path so tests don't touch user state."""
    cfg_path = tmp_path / "config.toml"
    monkeypatch.setenv("KIRIT_CONFIG", str(cfg_path))
    for name in ("KIRIT_LIST_LIMIT", "KIRIT_STRICT_ENUMS", "KIRIT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return cfg_path


@pytest.fixture(autouse=True)
def data_dir(tmp_path: Path, monkeypatch: Any) -> Path:
    """Keep every collection file under tmp_path."""
    target = tmp_path / "kirit-data"
    monkeypatch.setenv("KIRIT_DATA_DIR", str(target))
    monkeypatch.setenv("KIRIT_SHOW_BANNER", "false")
    return target


@pytest.fixture
def paths(data_dir: Path) -> StoragePaths:
    storage = StoragePaths.from_dir(data_dir)
    init_storage(storage)
    return storage


@pytest.fixture
def stores(paths: StoragePaths) -> Stores:
    return Stores.open(paths)


@pytest.fixture(autouse=True)
def capture_console(monkeypatch: Any) -> Console:
    """Use a wide, colourless Rich console during tests so output lines don't wrap."""
    import importlib

    test_console = Console(record=True, width=200, color_system=None)
    test_stderr = Console(stderr=True, width=200, color_system=None)
    for module_name in CONSOLE_MODULES:
        module = importlib.import_module(module_name)
        monkeypatch.setattr(module, "console", test_console)
    import kirit.core.console as core_console

    monkeypatch.setattr(core_console, "stderr_console", test_stderr)
    return test_console
