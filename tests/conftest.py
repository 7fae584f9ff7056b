from pathlib import Path
import textwrap

import pytest
from typer.testing import CliRunner

from asseter.config import get_settings
from asseter.pattern import InstanceRegistry


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def registry():
    with InstanceRegistry() as reg:
        yield reg


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("ASSETER_XHTML_STYLE", raising=False)
    monkeypatch.delenv("ASSETER_LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_manifest(tmp_path: Path) -> Path:
    """
    Write a small asset manifest for tests and return its path.
    """
    manifest_text = textwrap.dedent(
        """
        [[asset]]
        kind = "css"
        src = "assets/css/styles.css"

        [[asset]]
        kind = "script"
        src = "assets/js/app.js"
        flags = ["defer"]

        [[asset]]
        kind = "img"
        src = "assets/img/logo.png"
        attributes = { id = "logo" }
        """
    ).strip()
    path = tmp_path / "assets.toml"
    path.write_text(manifest_text + "\n", encoding="utf-8")
    return path
