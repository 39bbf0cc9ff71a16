"""Try container, partial-result aggregation and response-shape projection."""

from src.tryresult.aggregate import AggregatedResult, combine_all, combine_keyed
from src.tryresult.config import TryResultConfig, get_config
from src.tryresult.errors import ErrorInfo, FetchError, error_from_exception, to_error_info
from src.tryresult.fetch import fetch_all, gather_all
from src.tryresult.response import ResponseShape, to_response_shape
from src.tryresult.result import (
    Failure,
    Success,
    Try,
    attempt,
    attempt_async,
    attempting,
    failure,
    success,
)

__all__ = [
    "AggregatedResult",
    "combine_all",
    "combine_keyed",
    "TryResultConfig",
    "get_config",
    "ErrorInfo",
    "FetchError",
    "error_from_exception",
    "to_error_info",
    "fetch_all",
    "gather_all",
    "ResponseShape",
    "to_response_shape",
    "Failure",
    "Success",
    "Try",
    "attempt",
    "attempt_async",
    "attempting",
    "failure",
    "success",
]
