# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Back-off policy shared by :class:`Retry` and :class:`AsyncRetry`.

A policy decides three things for a failed call: whether the error is worth
another attempt (the predicate), how long to wait before it (exponential
back-off, stretched to any ``Retry-After`` the service sent) and when to give
up (the overall timeout).
"""

from __future__ import annotations

import random
from typing import Any, Callable, Optional, TYPE_CHECKING

from pipeline_client import exceptions
from pipeline_client import rest_helpers

if TYPE_CHECKING:
    import sys

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

_DEFAULT_INITIAL_DELAY = 1.0  # seconds
_DEFAULT_MAXIMUM_DELAY = 60.0  # seconds
_DEFAULT_DELAY_MULTIPLIER = 2.0
_DEFAULT_TIMEOUT = 120.0  # seconds


def if_exception_type(
    *exception_types: type[BaseException],
) -> Callable[[BaseException], bool]:
    """Creates a predicate to check if the exception is of a given type.

    Args:
        exception_types (Sequence[:func:`type`]): The exception types to check
            for.

    Returns:
        Callable[Exception]: A predicate that returns True if the provided
            exception is of the given type(s).
    """

    def if_exception_type_predicate(exception: BaseException) -> bool:
        return isinstance(exception, exception_types)

    return if_exception_type_predicate


# pylint: disable=invalid-name
if_transient_error = if_exception_type(
    exceptions.InternalServerError,
    exceptions.TooManyRequests,
    exceptions.ServiceUnavailable,
    exceptions.TransportError,
)
"""The default predicate: errors a later attempt may not hit.

- :class:`pipeline_client.exceptions.InternalServerError` - HTTP 500
- :class:`pipeline_client.exceptions.TooManyRequests` - HTTP 429
- :class:`pipeline_client.exceptions.ServiceUnavailable` - HTTP 503
- :class:`pipeline_client.exceptions.TransportError` - no response was
    received.

Writes are retried too; pass ``if_match`` to make a retried update safe.
"""
# pylint: enable=invalid-name


def exponential_sleep_generator(initial, maximum, multiplier=_DEFAULT_DELAY_MULTIPLIER):
    """Yield back-off delays with full jitter.

    Each delay is drawn uniformly from ``[0, cap]``, where ``cap`` starts at
    ``initial`` and is multiplied by ``multiplier`` after every draw, never
    exceeding ``maximum``.

    Args:
        initial (float): The first cap, in seconds. Must be greater than 0.
        maximum (float): The largest cap, in seconds.
        multiplier (float): Growth factor of the cap.

    Yields:
        float: successive sleep intervals.
    """
    cap = min(initial, maximum)
    while True:
        yield random.uniform(0.0, cap)
        cap = min(cap * multiplier, maximum)


def server_requested_delay(exc: BaseException) -> Optional[float]:
    """The ``Retry-After`` delay carried by a service error, if any.

    Args:
        exc (Exception): An error raised by an attempt.

    Returns:
        Optional[float]: Seconds the service asked the client to wait, or
            ``None``.
    """
    if not isinstance(exc, exceptions.ServiceError) or exc.response is None:
        return None
    return rest_helpers.parse_retry_after(exc.response.headers)


def next_delay(sleep: float, exc: BaseException) -> float:
    """The back-off delay, lengthened to the service's ``Retry-After``."""
    requested = server_requested_delay(exc)
    if requested is not None and requested > sleep:
        return requested
    return sleep


def build_timeout_error(timeout, last_exc):
    """Build the error raised when retrying runs out of time.

    Args:
        timeout (Optional[float]): The configured timeout, for the message.
        last_exc (Optional[Exception]): The most recent retryable error.

    Returns:
        RetryError: the error to raise, chained to ``last_exc`` by the caller.
    """
    timeout_val_str = "of {:.1f}s ".format(timeout) if timeout is not None else ""
    return exceptions.RetryError(
        "Timeout {}exceeded while calling target function".format(timeout_val_str),
        last_exc,
    )


class _BaseRetry(object):
    """Immutable retry settings shared by the blocking and asyncio decorators.

    Not meant to be instantiated directly; the ``with_*`` methods return
    modified copies of the concrete subclass.
    """

    def __init__(
        self,
        predicate: Callable[[Exception], bool] = if_transient_error,
        initial: float = _DEFAULT_INITIAL_DELAY,
        maximum: float = _DEFAULT_MAXIMUM_DELAY,
        multiplier: float = _DEFAULT_DELAY_MULTIPLIER,
        timeout: float | None = _DEFAULT_TIMEOUT,
        on_error: Callable[[Exception], Any] | None = None,
    ) -> None:
        self._predicate = predicate
        self._initial = initial
        self._maximum = maximum
        self._multiplier = multiplier
        self._timeout = timeout
        self._on_error = on_error

    def __call__(self, *args, **kwargs) -> Any:
        raise NotImplementedError("Not implemented in base class")

    @property
    def timeout(self) -> float | None:
        """Optional[float]: Seconds after which retrying stops."""
        return self._timeout

    def _sleep_generator(self):
        return exponential_sleep_generator(
            self._initial, self._maximum, multiplier=self._multiplier
        )

    def _replace(self, **changes) -> Self:
        settings = {
            "predicate": self._predicate,
            "initial": self._initial,
            "maximum": self._maximum,
            "multiplier": self._multiplier,
            "timeout": self._timeout,
            "on_error": self._on_error,
        }
        settings.update(
            (name, value) for name, value in changes.items() if value is not None
        )
        return type(self)(**settings)

    def with_timeout(self, timeout) -> Self:
        """Return a copy of this retry with the given timeout.

        Args:
            timeout (float): How long to keep retrying, in seconds.

        Returns:
            A new retry instance with the given timeout.
        """
        return self._replace(timeout=timeout)

    def with_predicate(self, predicate) -> Self:
        """Return a copy of this retry with the given predicate.

        Args:
            predicate (Callable[Exception]): A callable that should return
                ``True`` if the given exception is retryable.

        Returns:
            A new retry instance with the given predicate.
        """
        return self._replace(predicate=predicate)

    def with_delay(self, initial=None, maximum=None, multiplier=None) -> Self:
        """Return a copy of this retry with the given delay options.

        Omitted options keep their current value.

        Args:
            initial (float): The first back-off cap, in seconds.
            maximum (float): The largest back-off cap, in seconds.
            multiplier (float): Growth factor of the cap.

        Returns:
            A new retry instance with the given delay options.
        """
        return self._replace(initial=initial, maximum=maximum, multiplier=multiplier)

    def __str__(self) -> str:
        return (
            "<{} predicate={}, initial={:.1f}, maximum={:.1f}, "
            "multiplier={:.1f}, timeout={}, on_error={}>".format(
                type(self).__name__,
                self._predicate,
                self._initial,
                self._maximum,
                self._multiplier,
                self._timeout,
                self._on_error,
            )
        )
