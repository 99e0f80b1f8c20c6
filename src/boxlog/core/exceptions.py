"""Custom exception hierarchy for boxlog."""

from typing import Any


class BoxLogError(Exception):
    """Base exception for all boxlog errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class SinkWriteError(BoxLogError):
    """Writing a rendered event to the output sink failed."""

    def __init__(self, reason: str, size: int):
        super().__init__(
            code="SINK_WRITE_FAILED",
            message=f"Failed to write {size} bytes to log output: {reason}",
            details={"reason": reason, "size": size},
        )


class InvalidLevelError(BoxLogError):
    """Level name or number is not one of the known levels."""

    def __init__(self, value: object):
        super().__init__(
            code="INVALID_LEVEL",
            message=f"Unknown log level '{value}'",
            details={"value": str(value)},
        )


class SerializationError(BoxLogError):
    """Structured value could not be converted to text."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            code="SERIALIZATION_FAILED",
            message=f"Failed to serialize value of '{key}': {reason}",
            details={"key": key, "reason": reason},
        )
