"""Runtime settings.

Values come from `JOBFINDER_*` environment variables; a `.env` file in the
working directory is loaded first so local overrides don't need exporting.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_PREFIX = "JOBFINDER_"


class Settings(BaseModel):
    base_url: str = Field(default="https://testapi.getlokalapp.com/common", description="Listing API root.")
    timeout_s: float = Field(default=20.0, gt=0)
    storage_dir: Path = Field(default=Path("~/.jobfinder"), description="Directory for the bookmark store.")
    primary_key: str = "jobBookmarks"
    backup_key: str = "jobBookmarks_backup"
    clear_backup: bool = Field(
        default=False,
        description="Also delete the backup key when all bookmarks are cleared.",
    )
    log_level: str = "INFO"

    @property
    def jobs_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/jobs"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build `Settings` from the environment (or an explicit mapping, for tests)."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    values = {}
    for name in Settings.model_fields:
        raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw.strip():
            values[name] = raw.strip()
    return Settings.model_validate(values)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
