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

"""Retrying blocking client calls.

Client methods send each request exactly once unless a :class:`Retry` is
passed as ``retry``. The same policy then also covers the status checks of
a long-running operation:

.. code-block:: python

    my_retry = retry.Retry(timeout=60)
    pipeline = client.get_pipeline("etl", retry=my_retry)
    poller = client.delete_pipeline("etl", retry=my_retry)

A :class:`Retry` is also a decorator for any callable:

.. code-block:: python

    @retry.Retry(predicate=retry.if_exception_type(exceptions.NotFound))
    def wait_for_pipeline():
        return client.get_pipeline("etl")

Between attempts the caller sleeps for an exponentially growing, jittered
delay, or for the ``Retry-After`` the service sent with a 429 or 503 when
that is longer. Retrying stops once the next attempt would start after
``timeout`` seconds.
"""

from __future__ import annotations

import datetime
import functools
import logging
import time
from typing import Any, Callable, TypeVar, TYPE_CHECKING

from pipeline_client import datetime_helpers
from pipeline_client.retry.retry_base import _BaseRetry
from pipeline_client.retry.retry_base import build_timeout_error
from pipeline_client.retry.retry_base import next_delay

if TYPE_CHECKING:
    import sys

    if sys.version_info >= (3, 10):
        from typing import ParamSpec
    else:
        from typing_extensions import ParamSpec

    _P = ParamSpec("_P")  # target function call parameters
    _R = TypeVar("_R")  # target function returned value

_LOGGER = logging.getLogger("pipeline_client.retry")


def retry_target(target, predicate, sleep_generator, timeout=None, on_error=None):
    """Call ``target`` until it succeeds, fails for good or time runs out.

    Args:
        target (Callable[[], Any]): A nullary callable; bind arguments with
            :func:`functools.partial`.
        predicate (Callable[Exception]): Returns ``True`` for errors worth
            another attempt.
        sleep_generator (Iterable[float]): Back-off delays; one is consumed
            per attempt.
        timeout (Optional[float]): Seconds, counted from the first attempt,
            after which no further attempt is started.
        on_error (Optional[Callable[Exception]]): Called with each retryable
            error before sleeping. Errors it raises are not caught.

    Returns:
        Any: the return value of the target function.

    Raises:
        pipeline_client.exceptions.RetryError: If the next attempt would
            start after ``timeout``. Chained to the last error.
        ValueError: If the sleep generator stops yielding values.
        Exception: The error of an attempt that ``predicate`` rejects.
    """
    deadline = None
    if timeout is not None:
        deadline = datetime_helpers.utcnow() + datetime.timedelta(seconds=timeout)

    last_exc = None
    for sleep in sleep_generator:
        try:
            return target()
        # pylint: disable=broad-except
        except Exception as exc:
            if not predicate(exc):
                raise
            last_exc = exc
            if on_error is not None:
                on_error(exc)

        sleep = next_delay(sleep, last_exc)
        if deadline is not None:
            next_attempt = datetime_helpers.utcnow() + datetime.timedelta(
                seconds=sleep
            )
            if next_attempt > deadline:
                raise build_timeout_error(timeout, last_exc) from last_exc

        _LOGGER.debug("Retrying due to %s, sleeping %.1fs ...", last_exc, sleep)
        time.sleep(sleep)

    raise ValueError("Sleep generator stopped yielding sleep values.")


class Retry(_BaseRetry):
    """Retry policy and decorator for blocking calls.

    Args:
        predicate (Callable[Exception]): Returns ``True`` for retryable
            errors. Defaults to :data:`if_transient_error`.
        initial (float): The first back-off cap, in seconds. Must be
            greater than 0.
        maximum (float): The largest back-off cap, in seconds.
        multiplier (float): Growth factor of the cap.
        timeout (Optional[float]): How long to keep retrying, in seconds.
            The per-request timeout is passed to client methods separately.
        on_error (Optional[Callable[Exception]]): Called with each retryable
            error. Errors it raises are not caught.
    """

    def __call__(
        self,
        func: Callable[_P, _R],
        on_error: Callable[[BaseException], Any] | None = None,
    ) -> Callable[_P, _R]:
        """Wrap a callable with retry behavior.

        Args:
            func (Callable): The callable to add retry behavior to.
            on_error (Optional[Callable[Exception]]): Used when the policy
                itself has no ``on_error``.

        Returns:
            Callable: ``func`` with retry behavior.
        """
        if self._on_error is not None:
            on_error = self._on_error

        @functools.wraps(func)
        def retry_wrapped_func(*args: _P.args, **kwargs: _P.kwargs) -> _R:
            return retry_target(
                functools.partial(func, *args, **kwargs),
                self._predicate,
                self._sleep_generator(),
                timeout=self._timeout,
                on_error=on_error,
            )

        return retry_wrapped_func
