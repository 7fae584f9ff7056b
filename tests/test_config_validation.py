from pathlib import Path
import textwrap
import logging

import pytest

from asseter.config import ConfigError, load_config


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "assets.toml"
    path.write_text(textwrap.dedent(body).strip() + "\n", encoding="utf-8")
    return path


def test_loads_assets_in_order(sample_manifest: Path) -> None:
    manifest = load_config(sample_manifest)

    assert [asset.kind for asset in manifest.assets] == ["css", "script", "img"]
    assert manifest.assets[1].attribute_set() == {0: "defer"}
    assert manifest.assets[2].attributes == {"id": "logo"}
    assert manifest.xhtml_style is False


def test_hash_is_stable(sample_manifest: Path) -> None:
    assert load_config(sample_manifest).hash == load_config(sample_manifest).hash


def test_rejects_unknown_keys(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        unexpected = "nope"

        [[asset]]
        kind = "css"
        src = "a.css"
        """,
    )

    with pytest.raises(ConfigError) as exc:
        load_config(path)

    assert "extra" in str(exc.value).lower()


def test_rejects_plural_asset_tables(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        [[assets]]
        kind = "css"
        src = "a.css"
        """,
    )

    with pytest.raises(ConfigError) as exc:
        load_config(path)

    assert "[[asset]]" in str(exc.value)


def test_rejects_unknown_kind(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        [[asset]]
        kind = "font"
        src = "a.woff2"
        """,
    )

    with pytest.raises(ConfigError) as exc:
        load_config(path)

    assert "kind" in str(exc.value)


def test_tag_assets_need_a_name(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        [[asset]]
        kind = "tag"
        content = "hello"
        """,
    )

    with pytest.raises(ConfigError) as exc:
        load_config(path)

    assert "name" in str(exc.value)


def test_rejects_invalid_toml(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "[[asset]\nkind = ")

    with pytest.raises(ConfigError) as exc:
        load_config(path)

    assert "Invalid TOML" in str(exc.value)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.toml")


def test_warns_on_empty_manifest(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = _write_config(tmp_path, 'xhtml_style = true')

    caplog.set_level(logging.WARNING)
    manifest = load_config(path)

    assert manifest.xhtml_style is True
    assert "no [[asset]] entries" in caplog.text
