# configurations/settings_base.py
"""
Base configuration classes and environment handling.
"""

import os
from dataclasses import dataclass
from typing import Optional

SUPPORTED_ENVIRONMENTS = ("development", "testing", "production")
DEFAULT_ENVIRONMENT = "development"


@dataclass
class EnvironmentVariables:
    """
    Location of the .env file read at import time.
    """

    env_file_path: Optional[str] = os.getenv("KSI_ENV_FILE", ".env")


def resolve_environment(environment: Optional[str] = None) -> str:
    """
    Normalise an environment name, falling back to ENVIRONMENT or the default.

    Raises:
        ValueError: If the name is not a supported environment
    """
    name = (environment or os.getenv("ENVIRONMENT") or DEFAULT_ENVIRONMENT).lower()
    if name not in SUPPORTED_ENVIRONMENTS:
        raise ValueError(f"Unknown environment: {name}")
    return name
