"""Configuration objects and constants for the compactor."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) monolith/1.0"
)
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class MonolithConfig:
    """Settings fixed for the lifetime of a single conversion run."""

    output_as_base64: bool = False
    quiet: bool = False
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    scripts_as_data_uri: bool = True
