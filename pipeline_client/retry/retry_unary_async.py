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

"""Retrying coroutine client calls.

:class:`AsyncRetry` takes the same settings as
:class:`~pipeline_client.retry.Retry` and is passed the same way:

.. code-block:: python

    my_retry = retry.AsyncRetry(timeout=60)
    pipeline = await client.get_pipeline("etl", retry=my_retry)

Unlike the blocking policy, ``timeout`` also bounds the running attempt: an
attempt still pending at the deadline is cancelled, and the last back-off
delay is cut short so the final attempt starts before the deadline.
"""

from __future__ import annotations

import asyncio
import datetime
import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar, TYPE_CHECKING

from pipeline_client import datetime_helpers
from pipeline_client.retry.retry_base import _BaseRetry
from pipeline_client.retry.retry_base import build_timeout_error
from pipeline_client.retry.retry_base import next_delay
from pipeline_client.retry.retry_base import server_requested_delay

if TYPE_CHECKING:
    import sys

    if sys.version_info >= (3, 10):
        from typing import ParamSpec
    else:
        from typing_extensions import ParamSpec

    _P = ParamSpec("_P")  # target function call parameters
    _R = TypeVar("_R")  # target function returned value

_LOGGER = logging.getLogger("pipeline_client.retry")


async def retry_target(target, predicate, sleep_generator, timeout=None, on_error=None):
    """Await ``target()`` until it succeeds, fails for good or time runs out.

    Args:
        target (Callable[[], Awaitable[Any]]): A nullary coroutine function;
            bind arguments with :func:`functools.partial`.
        predicate (Callable[Exception]): Returns ``True`` for errors worth
            another attempt. Attempts cut off by ``timeout`` always are.
        sleep_generator (Iterable[float]): Back-off delays; one is consumed
            per attempt.
        timeout (Optional[float]): Seconds, counted from the first attempt,
            after which retrying stops.
        on_error (Optional[Callable[Exception]]): Called with each retryable
            error before sleeping. Errors it raises are not caught.

    Returns:
        Any: the result of the target coroutine.

    Raises:
        pipeline_client.exceptions.RetryError: When ``timeout`` is reached,
            or the service asks for a delay that would pass it. Chained to
            the last error.
        ValueError: If the sleep generator stops yielding values.
        Exception: The error of an attempt that ``predicate`` rejects.
    """
    deadline = None
    if timeout:
        deadline = datetime_helpers.utcnow() + datetime.timedelta(seconds=timeout)

    last_exc = None
    for sleep in sleep_generator:
        try:
            if deadline is None:
                return await target()
            remaining = (deadline - datetime_helpers.utcnow()).total_seconds()
            return await asyncio.wait_for(target(), timeout=remaining)
        # pylint: disable=broad-except
        except Exception as exc:
            if not predicate(exc) and not isinstance(exc, asyncio.TimeoutError):
                raise
            last_exc = exc
            if on_error is not None:
                on_error(exc)

        sleep = next_delay(sleep, last_exc)
        if deadline is not None:
            remaining = (deadline - datetime_helpers.utcnow()).total_seconds()
            requested = server_requested_delay(last_exc)
            if remaining <= 0 or (requested is not None and requested > remaining):
                raise build_timeout_error(timeout, last_exc) from last_exc
            sleep = min(sleep, remaining)

        _LOGGER.debug("Retrying due to %s, sleeping %.1fs ...", last_exc, sleep)
        await asyncio.sleep(sleep)

    raise ValueError("Sleep generator stopped yielding sleep values.")


class AsyncRetry(_BaseRetry):
    """Retry policy and decorator for coroutine functions.

    Args:
        predicate (Callable[Exception]): Returns ``True`` for retryable
            errors. Defaults to :data:`if_transient_error`.
        initial (float): The first back-off cap, in seconds. Must be
            greater than 0.
        maximum (float): The largest back-off cap, in seconds.
        multiplier (float): Growth factor of the cap.
        timeout (Optional[float]): How long to keep retrying, in seconds,
            including the running attempt.
        on_error (Optional[Callable[Exception]]): Called with each retryable
            error. Errors it raises are not caught.
    """

    def __call__(
        self,
        func: Callable[_P, Awaitable[_R]],
        on_error: Callable[[BaseException], Any] | None = None,
    ) -> Callable[_P, Awaitable[_R]]:
        """Wrap a coroutine function with retry behavior.

        Args:
            func (Callable): The coroutine function to add retry behavior to.
            on_error (Optional[Callable[Exception]]): Used when the policy
                itself has no ``on_error``.

        Returns:
            Callable: ``func`` with retry behavior.
        """
        if self._on_error is not None:
            on_error = self._on_error

        @functools.wraps(func)
        async def retry_wrapped_func(*args: _P.args, **kwargs: _P.kwargs) -> _R:
            return await retry_target(
                functools.partial(func, *args, **kwargs),
                self._predicate,
                self._sleep_generator(),
                timeout=self._timeout,
                on_error=on_error,
            )

        return retry_wrapped_func
