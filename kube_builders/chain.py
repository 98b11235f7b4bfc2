"""Short-circuiting composition for fluent builder mutations.

Builders are assembled with chained calls such as
`builder.with_port(179).with_password("secret")`. A mutation that detects
invalid input raises a `BuilderException`; `chained` turns that into the
builder's terminal error instead of interrupting the chain, and every later
chained call on the poisoned builder becomes a no-op that returns the builder
unchanged. The first recorded error is never replaced. It surfaces when the
caller runs a lifecycle operation or extracts the assembled object.
"""

from collections.abc import Callable
import functools
import logging
from typing import Concatenate, ParamSpec, Protocol, TypeVar

from .exceptions import BuilderException

__all__ = [
    "Poisonable",
    "chained",
]

_LOGGER = logging.getLogger(__name__)


class Poisonable(Protocol):
    """A builder holding a sticky error."""

    error: BuilderException | None


B = TypeVar("B", bound=Poisonable)
P = ParamSpec("P")


def chained(func: Callable[Concatenate[B, P], None]) -> Callable[Concatenate[B, P], B]:
    """Decorate a builder mutation so it short circuits once the builder is poisoned."""

    @functools.wraps(func)
    def wrapper(builder: B, *args: P.args, **kwargs: P.kwargs) -> B:
        if builder.error is not None:
            _LOGGER.debug(
                "Skipping %s on %s with error: %s",
                func.__name__,
                type(builder).__name__,
                builder.error,
            )
            return builder
        try:
            func(builder, *args, **kwargs)
        except BuilderException as err:
            if builder.error is None:
                _LOGGER.debug(
                    "%s poisoned by %s: %s", type(builder).__name__, func.__name__, err
                )
                builder.error = err
        return builder

    return wrapper
