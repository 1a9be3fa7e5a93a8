# SPDX-FileCopyrightText: 2026 Linenode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Method-level trace decorator for objects that carry an EventLog."""

import functools
import inspect
from collections.abc import Callable
from typing import Any, Protocol, TypeVar, runtime_checkable

from linenode.logging.event_log import EventLog


@runtime_checkable
class Loggable(Protocol):
    """Instance with an optional event log. Used by @log_method."""

    _log: EventLog | None


def _build_args_dict(
    fn: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> dict[str, Any]:
    """Map positional + keyword args to parameter names, skipping self."""
    sig = inspect.signature(fn)
    # None stands in for self (already stripped from args by the wrapper).
    bound = sig.bind(None, *args, **kwargs)
    bound.arguments.pop("self", None)
    return {name: _serialize(value) for name, value in bound.arguments.items()}


def _get_log(instance: Loggable) -> EventLog | None:
    return instance._log


_F = TypeVar("_F", bound=Callable[..., Any])


def log_method(
    *,
    before: bool = False,
    after: bool = False,
) -> Callable[[_F], _F]:
    """Log method calls to the instance's EventLog.

    Expects the instance to have a `_log: EventLog | None` attribute.
    If _log is None, the method runs without logging. With after=True a
    raised exception is recorded as `<name>.error` and re-raised.
    """

    def decorator(fn: _F) -> _F:
        event_name = fn.__name__

        @functools.wraps(fn)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            log = _get_log(self)
            args_dict = _build_args_dict(fn, args, kwargs) if log else {}
            if log and before:
                log.log(event_name, args_dict)
            try:
                result = fn(self, *args, **kwargs)
            except Exception as exc:
                if log and after:
                    log.log(
                        f"{event_name}.error",
                        {"error": type(exc).__name__, "detail": str(exc)},
                    )
                raise
            if log and after:
                result_data: dict[str, Any] = {**args_dict}
                if result is not None:
                    result_data["result"] = _serialize(result)
                log.log(f"{event_name}.result", result_data)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def _serialize(value: Any) -> Any:
    """Best-effort serialization for log entries."""
    if isinstance(value, str | int | float | bool | type(None)):
        return value
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return str(value)
