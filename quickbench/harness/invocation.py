"""Invoke user callables and turn their exceptions into failure messages.

Every hook and benchmark is called through ``invoke()``. Anything it raises
is wrapped in an ``InvocationFailure`` whose ``__cause__`` is the original
exception, so callers can tell "the call failed" apart from "why it failed".
``failure_message()`` unwraps exactly one level to surface the useful text.
"""

from collections.abc import Callable
from typing import Any

from quickbench.harness.base import HarnessError

NO_MESSAGE = "(No message)"


class InvocationFailure(HarnessError):
    """A hook or benchmark raised while being invoked."""

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"Invocation of {target} failed")

    @property
    def inner(self) -> BaseException | None:
        """The exception raised by the invoked callable, if any."""
        return self.__cause__


def invoke(target: str, func: Callable[..., Any], *args: Any) -> Any:
    """Call ``func(*args)``, wrapping any Exception in InvocationFailure.

    KeyboardInterrupt and SystemExit are not failures of the callable and
    propagate unchanged.

    Raises:
        InvocationFailure: If func raises an Exception.
    """
    try:
        return func(*args)
    except Exception as e:
        raise InvocationFailure(target) from e


def failure_message(failure: BaseException) -> str:
    """Extract the message to report for a failed invocation.

    Uses the inner cause's message. Falls back to ``"(No message)"`` when
    there is no inner cause or it has no message.

    >>> try:
    ...     invoke("bench", lambda: 1 / 0)
    ... except InvocationFailure as e:
    ...     failure_message(e)
    'division by zero'
    >>> failure_message(InvocationFailure("bench"))
    '(No message)'
    """
    inner = failure.__cause__
    if inner is None:
        return NO_MESSAGE
    message = str(inner)
    return message if message else NO_MESSAGE
