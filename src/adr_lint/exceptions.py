"""Custom exception hierarchy for adr-lint.

All exceptions that cross layer boundaries must inherit from
:class:`AdrLintError`.  Raw third-party and OS exceptions (``OSError``,
``yaml.YAMLError``, ``UnicodeDecodeError``) must NEVER propagate beyond
the infrastructure layer — they are caught and re-raised as a typed
subclass defined here.

Hierarchy
---------
AdrLintError
├── DocumentNotFoundError
├── DocumentReadError
├── DocumentExistsError
├── ConfigError
├── RuleError
├── ScaffoldError
└── EnvironmentError
"""

from __future__ import annotations


class AdrLintError(Exception):
    """Base exception for all adr-lint errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Documents -------------------------------------------------------------

class DocumentNotFoundError(AdrLintError):
    """Raised when a document path does not exist or matches no files."""


class DocumentReadError(AdrLintError):
    """Raised when a document exists but cannot be read or decoded."""


class DocumentExistsError(AdrLintError):
    """Raised when writing a document would overwrite an existing file."""


# --- Configuration ---------------------------------------------------------

class ConfigError(AdrLintError):
    """Raised when the lint configuration is unreadable or invalid."""


# --- Rules -----------------------------------------------------------------

class RuleError(AdrLintError):
    """Raised when a rule fails to run or an unknown rule id is requested."""


# --- Scaffolding -----------------------------------------------------------

class ScaffoldError(AdrLintError):
    """Raised when a memo skeleton cannot be built from the given inputs."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(AdrLintError):
    """Raised when a required runtime dependency is not available."""


def append_config_hint(hint: str, config_path: str | None) -> str:
    """Append the offending config file location to an existing hint.

    The location is appended only once and preserves the original hint
    content verbatim.
    """
    if config_path is None:
        return hint
    marker = "Config file:"
    if marker in hint:
        return hint
    return "\n".join((hint, f"{marker} {config_path}"))
