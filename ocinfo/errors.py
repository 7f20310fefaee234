"""Error hierarchy for oc-info.

Every error is terminal: the CLI prints the message as an error line and
exits with status 1, whatever the subclass.
"""

from __future__ import annotations


class OcInfoError(Exception):
    """Base class for all oc-info failures."""


class UsageError(OcInfoError):
    """Raised for missing or malformed command-line arguments."""


class RegistryError(OcInfoError):
    """Raised when the registry root cannot be listed."""


class FetchError(OcInfoError):
    """Raised when a single component metadata request fails."""

    def __init__(self, href: str, cause: BaseException) -> None:
        self.href = href
        self.cause = cause
        super().__init__(f"could not fetch info for {href}: {cause}")
