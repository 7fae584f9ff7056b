"""
Settings loading helpers.
"""

from __future__ import annotations

import os
from pathlib import Path
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field
from dotenv import load_dotenv


def _load_dotenv() -> None:
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=True)


_load_dotenv()


class Settings(BaseModel):
    """
    Defaults read from environment variables.

    Attributes:
        xhtml_style: Default rendering mode for CLI commands.
        log_level: Overrides the CLI --log-level option when set.
    """
    xhtml_style: bool = Field(default=False, alias="ASSETER_XHTML_STYLE")
    log_level: Optional[str] = Field(default=None, alias="ASSETER_LOG_LEVEL")

    model_config = {
        "populate_by_name": True,
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load settings from environment/.env exactly once.

    Returns:
        A Settings object populated from environment variables.
    """
    values = {field.alias: os.getenv(field.alias) for field in Settings.model_fields.values()}
    return Settings(**{key: value for key, value in values.items() if value not in (None, "")})
