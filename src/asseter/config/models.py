"""
Pydantic models for validating asset manifest files.
"""

from __future__ import annotations

import hashlib
import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)

AttributeValue = Union[str, int, float, bool]


class ConfigError(RuntimeError):
    """Raised when manifest files cannot be loaded or validated."""


class AssetConfig(BaseModel):
    """
    A single asset entry in a manifest.

    Attributes:
        kind: Which builder renders the entry ("css", "script", "img" or "tag").
        src: Inline content, URI, or base64 image payload depending on kind.
        inline: Embed ``src`` instead of referencing it.
        attributes: Named attributes, rendered in file order.
        flags: Boolean attributes (e.g. ["defer"]), rendered after named ones.
        name: Tag name, only for kind "tag".
        content: Tag body, only for kind "tag".
    """
    kind: Literal["css", "script", "img", "tag"]
    src: str = ""
    inline: bool = False
    attributes: Dict[str, AttributeValue] = Field(default_factory=dict)
    flags: List[str] = Field(default_factory=list)
    name: Optional[str] = None
    content: Optional[str] = None

    model_config = {
        "extra": "forbid",
    }

    @model_validator(mode="after")
    def _check_kind_fields(self) -> "AssetConfig":
        if self.kind == "tag":
            if not self.name:
                raise ValueError("Assets of kind 'tag' need a 'name'.")
        elif self.name is not None or self.content is not None:
            raise ValueError(f"'name' and 'content' are only valid for kind 'tag', not '{self.kind}'.")
        elif not self.src:
            raise ValueError(f"Assets of kind '{self.kind}' need a 'src'.")
        return self

    def attribute_set(self) -> Dict[Any, Any]:
        """Named attributes followed by flags under integer keys."""
        attrs: Dict[Any, Any] = dict(self.attributes)
        for index, flag in enumerate(self.flags):
            attrs[index] = flag
        return attrs


class ManifestConfig(BaseModel):
    """
    Top-level asset manifest.

    Attributes:
        assets: Entries to render, in order.
        xhtml_style: Render boolean attributes and void tags the XHTML way.
        separator: Text placed between rendered tags.
    """
    assets: List[AssetConfig] = Field(default_factory=list)
    xhtml_style: bool = False
    separator: str = "\n"

    model_config = {
        "extra": "forbid",
    }

    @property
    def hash(self) -> str:
        """
        Deterministic hash of the normalized manifest, used to detect changes.
        """
        payload = self.model_dump(mode="json", round_trip=True)
        blob = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
        return hashlib.sha256(blob).hexdigest()


def load_config(path: Path | str) -> ManifestConfig:
    """
    Load and validate a TOML manifest into a ManifestConfig instance.

    Args:
        path: Path to the TOML manifest.

    Returns:
        A validated ManifestConfig object.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Manifest file not found: {config_path}")

    try:
        with config_path.open("rb") as handle:
            raw_data: Dict[str, Any] = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read manifest file: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in manifest file: {exc}") from exc

    raw_data = _normalize_toml_schema(raw_data)

    try:
        manifest = ManifestConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc

    if not manifest.assets:
        logger.warning("Manifest %s lists no [[asset]] entries.", config_path)
    return manifest


def _normalize_toml_schema(data: Any) -> Dict[str, Any]:
    """
    Map the singular [[asset]] table array onto the plural ``assets`` field.
    """
    if not isinstance(data, dict):
        raise ConfigError("Manifest root must be a TOML table/object.")
    if "assets" in data:
        raise ConfigError("Use [[asset]] blocks (singular) instead of [[assets]].")

    normalized = dict(data)
    normalized["assets"] = _coerce_table_array(normalized.pop("asset", None), "asset")
    return normalized


def _coerce_table_array(value: Any, label: str) -> list[dict]:
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        if not all(isinstance(item, dict) for item in value):
            raise ConfigError(f"Each [[{label}]] entry must be a table/object.")
        return value
    raise ConfigError(f"Invalid [{label}] block; expected a table or array of tables.")
