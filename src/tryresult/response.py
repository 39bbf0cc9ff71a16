"""Projection of aggregated results onto the API response shape.

    {
      "data":   {<key>: <value>, ...},
      "errors": [{"code": <int>, "errorMessage": <str>}, ...]
    }

``data`` holds only successful entries keyed by origin; ``errors`` lists the
failures in input order. The two are independent: errors are not tied to
keys, and a key missing from ``data`` says nothing about which error (if
any) it produced.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from pydantic import BaseModel, Field, field_serializer

from src.tryresult.aggregate import AggregatedResult
from src.tryresult.errors import to_error_info


class ResponseShape(BaseModel):
    """Partial-result response: successful data plus reported errors."""

    data: dict[str, Any] = Field(default_factory=dict)
    errors: list[Any] = Field(default_factory=list)

    @field_serializer("errors")
    def _serialize_errors(self, errors: list[Any]) -> list[Any]:
        # Exceptions have no wire form of their own.
        return [
            to_error_info(error).model_dump(by_alias=True)
            if isinstance(error, BaseException)
            else error
            for error in errors
        ]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict, dumping models by their wire aliases."""
        return self.model_dump(mode="json", by_alias=True)


def to_response_shape(
    aggregated: AggregatedResult[Any, Any],
    error_mapper: Optional[Callable[[Any], Any]] = None,
) -> ResponseShape:
    """Project an ``AggregatedResult`` onto the response shape.

    Args:
        aggregated: The batch outcome to project.
        error_mapper: Optional function applied to each failure, e.g.
            ``to_error_info`` to normalise exceptions.
    """
    data = {str(key): value for key, value in aggregated.items()}

    if error_mapper is None:
        errors = list(aggregated.failures)
    else:
        errors = [error_mapper(error) for error in aggregated.failures]

    return ResponseShape(data=data, errors=errors)
