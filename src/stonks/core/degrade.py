"""
Persistence degrade policy.

Public service methods that touch the ledger are wrapped with
``degrade_on_persistence_error``: a PersistenceError raised underneath is
logged at the boundary and replaced by a named safe default, so callers can
render partial state instead of failing outright. Validation errors and any
other exception propagate untouched.
"""

import copy
import functools
import logging
from typing import Any, Callable, TypeVar

from stonks.core.exceptions import PersistenceError

F = TypeVar("F", bound=Callable[..., Any])

logger = logging.getLogger(__name__)


def degrade_on_persistence_error(default: Any) -> Callable[[F], F]:
    """
    Decorator: return ``default`` (a fresh copy for mutable defaults) when the
    wrapped call raises PersistenceError.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except PersistenceError as exc:
                logger.error(
                    "%s degraded to %r after persistence failure: %s",
                    func.__qualname__,
                    default,
                    exc.message,
                )
                return copy.copy(default)

        wrapper.degrade_default = default  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorator
