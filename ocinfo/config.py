"""Runtime configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from ocinfo import __version__

_TRUTHY = {"1", "true", "yes", "on"}


def _default_user_agent() -> str:
    return f"oc-info/{__version__}"


@dataclass
class Settings:
    """Settings shared by the HTTP client and the CLI."""

    user_agent: str = field(default_factory=_default_user_agent)
    verbose: bool = False

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            user_agent=env.get("OC_INFO_USER_AGENT", "") or _default_user_agent(),
            verbose=env.get("OC_INFO_VERBOSE", "").strip().lower() in _TRUTHY,
        )
