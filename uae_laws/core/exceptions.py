"""
UAE Laws Registry Exception Hierarchy

Centralized exception classes for the registry sync pipeline.
Per-instrument errors (EnrichmentError, ParseError) are recovered where they
occur; TransportError during discovery and any persistence failure surface as
FatalPipelineError and end the run.
"""
from typing import Optional, Any


class RegistryError(Exception):
    """
    Base exception for all registry errors.

    All custom exceptions in the registry inherit from this class
    so the CLI can report them uniformly.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """
        Initialize RegistryError.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class TransportError(RegistryError):
    """
    HTTP transport errors.

    Raised when a fetch returns a non-success status or the request itself fails.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ):
        """
        Initialize TransportError.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
            status_code: HTTP status code if a response was received
            url: The URL that failed
        """
        super().__init__(message, details)
        self.status_code = status_code
        self.url = url

    def __str__(self) -> str:
        """Return string representation including status code and URL if present."""
        base = super().__str__()
        parts = [base]
        if self.status_code:
            parts.append(f"Status: {self.status_code}")
        if self.url:
            parts.append(f"URL: {self.url}")
        return " | ".join(parts) if len(parts) > 1 else base


class ParseError(RegistryError):
    """
    Persisted state parsing errors.

    Raised when a snapshot file holds malformed JSON. The snapshot store
    recovers by treating the file as an empty snapshot.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        path: Optional[str] = None,
    ):
        super().__init__(message, details)
        self.path = path

    def __str__(self) -> str:
        base = super().__str__()
        if self.path:
            return f"{base} | File: {self.path}"
        return base


class EnrichmentError(RegistryError):
    """
    Portal enrichment errors.

    Raised for a single instrument whose portal page could not be fetched
    or read. Always recovered by degrading that instrument to "unknown".
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        instrument_id: Optional[str] = None,
        url: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize EnrichmentError.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
            instrument_id: The instrument being enriched
            url: The portal URL that failed
            original_error: The original exception that caused this error
        """
        super().__init__(message, details)
        self.instrument_id = instrument_id
        self.url = url
        self.original_error = original_error

    def __str__(self) -> str:
        """Return string representation including instrument and cause if present."""
        base = super().__str__()
        parts = [base]
        if self.instrument_id:
            parts.append(f"Instrument: {self.instrument_id}")
        if self.url:
            parts.append(f"URL: {self.url}")
        if self.original_error:
            parts.append(
                f"Caused by: {type(self.original_error).__name__}: {self.original_error}"
            )
        return " | ".join(parts) if len(parts) > 1 else base


class FatalPipelineError(RegistryError):
    """
    Unrecoverable pipeline errors.

    Raised when discovery cannot fetch an index page or when the run's
    outputs cannot be written. Nothing is persisted for the run.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        stage: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize FatalPipelineError.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
            stage: Pipeline stage that failed ('discovery', 'persistence')
            original_error: The original exception that caused this error
        """
        super().__init__(message, details)
        self.stage = stage
        self.original_error = original_error

    def __str__(self) -> str:
        base = super().__str__()
        parts = [base]
        if self.stage:
            parts.append(f"Stage: {self.stage}")
        if self.original_error:
            parts.append(
                f"Caused by: {type(self.original_error).__name__}: {self.original_error}"
            )
        return " | ".join(parts) if len(parts) > 1 else base


class ConfigurationError(RegistryError):
    """
    Configuration errors.

    Raised when a sources file is missing or invalid.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        config_key: Optional[str] = None,
        config_file: Optional[str] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
            config_key: The configuration key that is problematic
            config_file: The configuration file being read
        """
        super().__init__(message, details)
        self.config_key = config_key
        self.config_file = config_file

    def __str__(self) -> str:
        """Return string representation including config key and file if present."""
        base = super().__str__()
        parts = [base]
        if self.config_key:
            parts.append(f"Key: {self.config_key}")
        if self.config_file:
            parts.append(f"File: {self.config_file}")
        return " | ".join(parts) if len(parts) > 1 else base
