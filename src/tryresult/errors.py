"""Error values reported alongside partial data.

A failure inside a Try can be any value; at the response boundary it is
normalised to an ``ErrorInfo`` carrying a numeric code and a message.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from src.tryresult.config import get_config


class ErrorInfo(BaseModel):
    """A single reported error: ``{"code": int, "errorMessage": str}``."""

    model_config = {"frozen": True, "populate_by_name": True}

    code: int = Field(..., description="Numeric error code, HTTP-style")
    error_message: str = Field(
        ..., alias="errorMessage", description="Human-readable error message"
    )


class FetchError(Exception):
    """Raised by a data source to report a failure with a specific code."""

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else get_config().default_error_code

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.message, self.code))

    def __repr__(self) -> str:
        return f"FetchError(code={self.code}, message={self.message!r})"


def error_from_exception(
    exc: BaseException, default_code: Optional[int] = None
) -> ErrorInfo:
    """Describe an exception as an ``ErrorInfo``.

    A ``FetchError`` keeps its own code; anything else is reported with
    ``default_code`` or the configured default.
    """
    config = get_config()

    if isinstance(exc, FetchError):
        code = exc.code
        message = exc.message
    else:
        code = default_code if default_code is not None else config.default_error_code
        message = str(exc)

    if not message:
        message = type(exc).__name__
    elif config.include_exception_type:
        message = f"{type(exc).__name__}: {message}"

    return ErrorInfo(code=code, error_message=message)


def to_error_info(error: object, default_code: Optional[int] = None) -> ErrorInfo:
    """Normalise an arbitrary failure value to an ``ErrorInfo``."""
    if isinstance(error, ErrorInfo):
        return error
    if isinstance(error, BaseException):
        return error_from_exception(error, default_code)
    code = default_code if default_code is not None else get_config().default_error_code
    return ErrorInfo(code=code, error_message=str(error))
