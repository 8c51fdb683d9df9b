"""Custom exceptions for the LendReady document engine.

This module provides a hierarchy of exception classes for consistent error
handling across requirement resolution and document intake. All exceptions
inherit from LendReadyError, making it easy to catch all application-specific
errors.

Only a few conditions are errors at all. An unknown jurisdiction, an unknown
citizenship status or an unparseable date are handled by falling back to an
empty or partial result and never raise.

Example:
    try:
        uploaded = await pipeline.process(candidate, requirements)
    except LedgerStorageError as e:
        if e.recoverable:
            # Retry the ledger write later
            queue.append(candidate)
        else:
            raise
    except LendReadyError as e:
        logger.error("intake_failed", error=str(e))
"""

from typing import Any, Optional


class LendReadyError(Exception):
    """Base exception for all LendReady errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class UnknownEntityTypeError(LendReadyError):
    """Raised when a business entity type has no requirement table.

    Callers are expected to restrict entity types to the fixed vocabulary, so
    reaching this error means the caller sent something the tables do not
    know. The resolver never invents a document list for it.

    Example:
        >>> raise UnknownEntityTypeError("gmbh")
        UnknownEntityTypeError: Unknown entity type: 'gmbh'
    """

    def __init__(
        self,
        entity_type: Any,
        *,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            f"Unknown entity type: {entity_type!r}",
            details=details,
            recoverable=False,
        )
        self.entity_type = entity_type
        self.details["entity_type"] = str(entity_type)


class DocumentStateError(LendReadyError):
    """Raised when a candidate document is mutated outside its lifecycle.

    Recognized text is attached to a candidate exactly once, after OCR.
    """

    def __init__(
        self,
        message: str,
        *,
        document_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details, recoverable=False)
        self.document_id = document_id
        if document_id:
            self.details["document_id"] = document_id


class RecognitionError(LendReadyError):
    """Raised when the OCR collaborator cannot produce text for a document.

    Attributes:
        document_id: Identifier of the document being recognized.
        source: File path or provider link that was read (if known).

    Example:
        >>> raise RecognitionError(
        ...     "No text layer found",
        ...     document_id="doc-1",
        ...     source="/uploads/articles.pdf",
        ... )
        RecognitionError: No text layer found
    """

    def __init__(
        self,
        message: str,
        *,
        document_id: Optional[str] = None,
        source: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize RecognitionError.

        Args:
            message: Human-readable error description.
            document_id: Identifier of the document that failed.
            source: The path or link that was being read.
            details: Optional dictionary with additional context.
            recoverable: Whether recognition can be retried. Defaults to True
                since a different recognizer or a better scan may succeed.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.document_id = document_id
        self.source = source

        if document_id:
            self.details["document_id"] = document_id
        if source:
            self.details["source"] = source


class LedgerStorageError(LendReadyError):
    """Raised when the ledger collaborator fails to store a document."""

    def __init__(
        self,
        message: str,
        *,
        document_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.document_id = document_id
        if document_id:
            self.details["document_id"] = document_id


class ConfigurationError(LendReadyError):
    """Error raised when configuration is invalid or missing.

    Attributes:
        config_key: The configuration key that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "LendReadyError",
    "UnknownEntityTypeError",
    "DocumentStateError",
    "RecognitionError",
    "LedgerStorageError",
    "ConfigurationError",
]
