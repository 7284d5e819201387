"""
simopts exception hierarchy.

Provides user-friendly exceptions with helpful error messages and suggestions.
All simopts-specific exceptions inherit from SimOptsError for easy catching.

Option-level problems (unknown options, missing or malformed arguments,
duplicate registrations) are recovered by the engine: it builds the
exception, logs it and carries on with defaults. Only
InternalInconsistencyError is ever raised out of a parse.

Example:
    engine.parse_all(tokens)
    for issue in engine.issues:
        print(f"{issue.option}: {issue.message}")
"""

from __future__ import annotations

from typing import Any


class SimOptsError(Exception):
    """
    Base exception for all simopts errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Option Errors (recoverable)
# =============================================================================


class OptionError(SimOptsError):
    """Base class for problems with a single command line option."""

    def __init__(
        self,
        message: str,
        option: str | None = None,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.option = option
        merged = {"option": option}
        merged.update(details or {})
        super().__init__(message, suggestion, merged)


class UnknownOptionError(OptionError):
    """Raised when a token matches no registered option."""

    def __init__(self, token: str) -> None:
        message = f"option {token} unknown - ignored."
        suggestion = "Use --help to list the available options."
        super().__init__(message, None, suggestion, {"token": token})
        self.token = token


class MissingArgumentError(OptionError):
    """Raised when an option requiring an argument has none it can use."""

    def __init__(self, option: str) -> None:
        message = f"argument for --{option} missing - option removed."
        super().__init__(message, option)


class MalformedArgumentError(OptionError):
    """Raised when an option's argument is rejected."""

    def __init__(self, option: str, argument: str | None, reason: str | None = None) -> None:
        if argument is None:
            message = f"parsing argument for --{option} failed - option removed."
        else:
            message = f"parsing argument '{argument}' for --{option} failed - option removed."
        if reason:
            message += f" ({reason})"
        super().__init__(message, option, details={"argument": argument})
        self.argument = argument


class DuplicateOptionError(OptionError):
    """Raised when a second option registers an already used long name."""

    def __init__(
        self,
        option: str,
        kept_description: str | None = None,
        rejected_description: str | None = None,
    ) -> None:
        message = f"option --{option} overridden"
        if kept_description is not None or rejected_description is not None:
            message += f"\n         using  {kept_description}\n         instead of {rejected_description}"
        suggestion = "Register the overriding provider before the provider it specializes."
        super().__init__(message, option, suggestion)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(SimOptsError):
    """Raised when configuration is invalid or incomplete."""

    pass


class ConfigFileError(ConfigurationError):
    """Raised when an option file cannot be turned into tokens."""

    def __init__(self, path: str, reason: str) -> None:
        message = f"Invalid option file '{path}': {reason}."
        suggestion = "Option files must contain a mapping of long option names to arguments."
        super().__init__(message, suggestion, {"path": path})


# =============================================================================
# Engine Defects
# =============================================================================


class InternalInconsistencyError(SimOptsError):
    """Raised when the engine reaches a branch that should be unreachable."""

    def __init__(self, message: str, option: str | None = None) -> None:
        super().__init__(message, "This is a defect in simopts, not a problem with the input.", {"option": option})
        self.option = option


__all__ = [
    "SimOptsError",
    "OptionError",
    "UnknownOptionError",
    "MissingArgumentError",
    "MalformedArgumentError",
    "DuplicateOptionError",
    "ConfigurationError",
    "ConfigFileError",
    "InternalInconsistencyError",
]
