"""Timing and argument validation for the analytics facade."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, TypeVar, cast

from pydantic import BaseModel, ValidationError

from closet_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)
F = TypeVar("F", bound=Callable[..., Any])


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def _argument_summary(kwargs: Dict[str, Any]) -> Dict[str, Any]:
    # Write payloads are summarised by their keys.
    return {key: sorted(value) if isinstance(value, dict) else value for key, value in kwargs.items()}


def _validate(operation: str, model: type[BaseModel], kwargs: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return model.model_validate(kwargs).model_dump()
    except ValidationError as exc:
        log_event(
            LOGGER,
            logging.WARNING,
            "operation_validation_failed",
            operation=operation,
            errors=exc.errors(include_url=False, include_context=False),
        )
        raise


def instrument_operation(operation: str, input_model: type[BaseModel] | None = None) -> Callable[[F], F]:
    """Log start, completion or failure of a facade call together with its duration.

    Facade methods are called with keyword arguments only. When ``input_model``
    is given those arguments are validated against it and the coerced values
    are passed on; a :class:`ValidationError` propagates to the caller.
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if input_model is not None:
                kwargs = _validate(operation, input_model, kwargs)
            log_event(
                LOGGER,
                logging.INFO,
                "operation_started",
                operation=operation,
                arguments=_argument_summary(kwargs),
            )
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "operation_failed",
                    operation=operation,
                    duration_ms=_elapsed_ms(started),
                    exc_info=True,
                )
                raise
            log_event(
                LOGGER, logging.INFO, "operation_completed", operation=operation, duration_ms=_elapsed_ms(started)
            )
            return result

        return cast(F, wrapper)

    return decorator


__all__ = ["instrument_operation"]
