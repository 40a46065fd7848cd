# Trade Grid - Runtime Configuration
# SPDX-License-Identifier: Apache-2.0

"""
Runtime settings for ingest tooling.

Environment Variables:
- TRADEGRID_READ_BUFFER_SIZE: Bytes per read when counting lines (default: 131072)
- TRADEGRID_LOG_LEVEL: Logging level for the CLI (default: WARNING)
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from tradegrid.lines import READ_BUFFER_SIZE

ENV_PREFIX = "TRADEGRID_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class IngestSettings(BaseModel):
    """Settings shared by the ingest commands"""

    read_buffer_size: int = Field(
        READ_BUFFER_SIZE, ge=1, description="Bytes per read when counting lines"
    )
    log_level: str = Field("WARNING", description="Logging level name")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        level = str(v).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "IngestSettings":
        """
        Load settings from TRADEGRID_* environment variables.

        Unset variables fall back to the field defaults.
        """
        if environ is None:
            environ = os.environ

        values = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in environ:
                values[name] = environ[key]
        return cls(**values)
