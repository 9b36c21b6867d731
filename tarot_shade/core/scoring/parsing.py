"""Input parsing for collaborator payloads.

Payloads from the interpretation and persistence collaborators arrive as
plain mappings. These helpers turn them into models and surface any
pydantic failure as the engine's own ``ValidationError`` with a message
precise enough to display.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any, TypeVar, Union

from dateutil import parser as dateutil_parser
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from tarot_shade.core.scoring.errors import ValidationError
from tarot_shade.core.scoring.types import (
    CoreMetrics,
    Reading,
    ReadingInterpretation,
    ReadingScore,
    ShadeIndex,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

DateInput = Union[date, datetime, str]


def _format_errors(exc: PydanticValidationError) -> list[str]:
    """Flatten pydantic errors into ``path: message`` strings."""
    formatted = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "input"
        formatted.append(f"{location}: {error.get('msg', 'invalid value')}")
    return formatted


def coerce_model(model_cls: type[ModelT], data: Any) -> ModelT:
    """
    Return ``data`` as an instance of ``model_cls``.

    Model instances pass through untouched; mappings are validated.

    Raises:
        ValidationError: If ``data`` is not a mapping or fails validation
    """
    if isinstance(data, model_cls):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()
    if not isinstance(data, Mapping):
        raise ValidationError(
            f"Invalid {model_cls.__name__}: expected an object, got {type(data).__name__}"
        )
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as e:
        errors = _format_errors(e)
        raise ValidationError(f"Invalid {model_cls.__name__}: " + "; ".join(errors), errors) from e


def parse_shade_index(data: Any) -> ShadeIndex:
    return coerce_model(ShadeIndex, data)


def parse_core_metrics(data: Any) -> CoreMetrics:
    return coerce_model(CoreMetrics, data)


def parse_reading_score(data: Any) -> ReadingScore:
    return coerce_model(ReadingScore, data)


def parse_interpretation(data: Any) -> ReadingInterpretation:
    """Parse a resolved ``{text, scores}`` object from the interpretation collaborator."""
    return coerce_model(ReadingInterpretation, data)


def parse_reading(data: Any) -> Reading:
    return coerce_model(Reading, data)


def parse_readings(items: Iterable[Any]) -> list[Reading]:
    """
    Parse a reading history, reporting the index of the first bad entry.

    Raises:
        ValidationError: If any reading is malformed
    """
    readings = []
    for i, item in enumerate(items):
        try:
            readings.append(parse_reading(item))
        except ValidationError as e:
            raise ValidationError(f"Reading {i}: {e}", e.errors) from e
    return readings


def parse_date(value: DateInput) -> date:
    """
    Normalize a date-like value to a ``date``.

    Accepts ``date``, ``datetime``, or an ISO-8601 string
    (``2024-01-10`` or ``2024-01-10T08:00:00Z``).

    Raises:
        ValidationError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return dateutil_parser.isoparse(value.strip()).date()
        except (ValueError, TypeError):
            raise ValidationError(f"Unparseable date: {value!r}") from None
    raise ValidationError(f"Unparseable date: {value!r}")
