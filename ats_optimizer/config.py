"""
Runtime settings read from environment variables.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .loader import DEFAULT_MAX_BYTES


@dataclass(frozen=True)
class Settings:
    """Engine and service settings."""
    max_upload_bytes: Optional[int] = DEFAULT_MAX_BYTES
    process_timeout: float = 30.0
    default_format: str = "pdf"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ATS_* environment variables.

        ATS_MAX_UPLOAD_BYTES=0 disables the upload size limit.
        """
        env = os.environ if environ is None else environ
        max_bytes = int(env.get("ATS_MAX_UPLOAD_BYTES", DEFAULT_MAX_BYTES))
        return cls(
            max_upload_bytes=max_bytes or None,
            process_timeout=float(env.get("ATS_PROCESS_TIMEOUT", cls.process_timeout)),
            default_format=env.get("ATS_DEFAULT_FORMAT", cls.default_format).lower(),
        )
