"""DEBUG call tracing for the kernel modules."""

from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from itertools import islice
from typing import Any, Callable, Iterable, Mapping, MutableMapping, Optional, Set, TypeVar, cast

import numpy as np

F = TypeVar("F", bound=Callable[..., Any])

MAX_ITEMS = 6

_short = reprlib.Repr()
_short.maxlist = _short.maxtuple = _short.maxset = _short.maxdict = MAX_ITEMS
_short.maxstring = 80
_short.maxother = 120

_TRACED = "_aoc_debug_wrapped"


def describe(value: Any, *, limit: int = 300) -> str:
    """Short rendering of ``value`` for log lines; arrays are summarised, not printed."""

    if isinstance(value, np.ndarray):
        text = f"ndarray(shape={value.shape}, dtype={value.dtype})"
        if 0 < value.size <= MAX_ITEMS:
            text += f" values={value.tolist()}"
        elif value.size and np.issubdtype(value.dtype, np.number):
            text += f" min={value.min()!r} max={value.max()!r}"
        return text
    if isinstance(value, Mapping):
        shown = [f"{describe(k)}: {describe(v)}" for k, v in islice(value.items(), MAX_ITEMS)]
        if len(value) > MAX_ITEMS:
            shown.append(f"... ({len(value)} entries)")
        return "{" + ", ".join(shown) + "}"
    if isinstance(value, (list, tuple)) and len(value) > MAX_ITEMS:
        head = ", ".join(describe(item) for item in value[:MAX_ITEMS])
        return f"{type(value).__name__}[{head}, ... ({len(value)} items)]"
    text = _short.repr(value)
    return text if len(text) <= limit else text[:limit] + "..."


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Log entry, exit and failure of each call at DEBUG."""

    def decorator(func: F) -> F:
        if getattr(func, _TRACED, False):
            return func
        label = name or func.__qualname__

        @wraps(func)
        def traced(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            rendered = [describe(arg) for arg in args]
            rendered += [f"{key}={describe(val)}" for key, val in kwargs.items()]
            logger.debug("Entering %s (%s)", label, ", ".join(rendered))
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.debug("Exception in %s", label, exc_info=True)
                raise
            logger.debug("Exiting %s -> %s", label, describe(result) if log_result else "...")
            return result

        setattr(traced, _TRACED, True)
        return cast(F, traced)

    return decorator


def _traced_attribute(cls: type, attr: str, value: Any, logger: logging.Logger) -> Any:
    label = f"{cls.__name__}.{attr}"
    for kind in (staticmethod, classmethod):
        if isinstance(value, kind):
            return kind(debug_log_call(logger, name=label)(value.__func__))
    if inspect.isfunction(value) and value.__module__ == cls.__module__:
        return debug_log_call(logger, name=label)(value)
    return None


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Trace the functions and class methods a module defines.

    ``skip`` takes plain names (``"helper"``, ``"Kernel"``) or ``"Class.method"``.
    Exception classes and dunder attributes are never wrapped.
    """

    module = namespace.get("__name__")
    logger = logger or logging.getLogger(str(module))
    skipped: Set[str] = set(skip or ())

    for name, value in list(namespace.items()):
        if name in skipped or name.startswith("__") or getattr(value, "__module__", None) != module:
            continue
        if inspect.isfunction(value):
            namespace[name] = debug_log_call(logger, name=name)(value)
        elif inspect.isclass(value) and not issubclass(value, BaseException):
            for attr, member in list(vars(value).items()):
                if attr.startswith("__") or attr in skipped or f"{name}.{attr}" in skipped:
                    continue
                traced = _traced_attribute(value, attr, member, logger)
                if traced is not None:
                    setattr(value, attr, traced)


__all__ = ["describe", "debug_log_call", "apply_debug_logging"]
