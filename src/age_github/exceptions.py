"""Custom exception hierarchy for age-github.

All exceptions that cross layer boundaries must inherit from
:class:`AgeGithubError`.  Raw third-party exceptions (httpx, OS errors)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
AgeGithubError
├── UsageError
├── BinaryNotFoundError
├── InvalidHandleError
├── KeyFetchError
├── NoKeysFoundError
├── LaunchError
└── EnvironmentError
"""

from __future__ import annotations


class AgeGithubError(Exception):
    """Base exception for all age-github errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Invocation ------------------------------------------------------------

class UsageError(AgeGithubError):
    """Raised when the wrapper is invoked without any arguments."""


# --- Key resolution --------------------------------------------------------

class InvalidHandleError(AgeGithubError):
    """Raised when a ``@handle`` does not look like a GitHub user name."""


class KeyFetchError(AgeGithubError):
    """Raised when keys cannot be fetched or the response is rejected."""


class NoKeysFoundError(AgeGithubError):
    """Raised when a user publishes no usable ``ssh-`` keys."""


# --- External tool ---------------------------------------------------------

class BinaryNotFoundError(AgeGithubError):
    """Raised when the age binary cannot be located on the system PATH."""


class LaunchError(AgeGithubError):
    """Raised when control cannot be transferred to the age binary."""


class EnvironmentError(AgeGithubError):
    """Raised when an optional runtime dependency is not available."""
