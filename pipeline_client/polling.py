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

"""Blocking poller for long-running operations.

.. code-block:: python

    poller = client.create_or_update_pipeline("etl", pipeline)
    # Block until the service reports a terminal state.
    pipeline = poller.result()

Or drive it step by step:

.. code-block:: python

    while not poller.done():
        poller.poll()
        time.sleep(5)
"""

import contextlib
import logging
import threading
import time

from pipeline_client import exceptions
from pipeline_client import lro

_LOGGER = logging.getLogger(__name__)


class _BasePoller(object):
    """State and callbacks shared by :class:`LROPoller` and the async poller."""

    def __init__(
        self,
        dispatcher,
        initial_response,
        spec,
        cancel_callback=None,
        retry=None,
        timeout=None,
        polling_interval=lro.DEFAULT_POLLING_INTERVAL,
    ):
        self._dispatcher = dispatcher
        self._state = lro.LROState(
            initial_response, spec, serializer=dispatcher.serializer
        )
        self._cancel_callback = cancel_callback
        self._retry = retry
        self._timeout = timeout
        if polling_interval is None:
            polling_interval = lro.DEFAULT_POLLING_INTERVAL
        self._polling_interval = polling_interval
        self._done_callbacks = []
        self._callbacks_invoked = False

    @property
    def status(self):
        """pipeline_client.lro.OperationState: The current status."""
        return self._state.status

    @property
    def polling_url(self):
        """Optional[str]: The URL status checks are sent to."""
        return self._state.polling_url

    @property
    def last_response(self):
        """pipeline_client.transports.base.HttpResponse: The latest response."""
        return self._state.last_response

    @property
    def state(self):
        """pipeline_client.lro.LROState: The underlying state."""
        return self._state

    def done(self):
        """Checks to see if the operation is complete.

        Returns:
            bool: True if the operation reached a terminal state.
        """
        return self._state.done

    def running(self):
        """True if the operation is currently running."""
        return not self.done()

    def add_done_callback(self, fn):
        """Add a callback to be executed when the operation is complete.

        If the operation is already complete, the callback is called
        immediately.

        Args:
            fn (Callable[Poller]): The callback to execute when the
                operation is complete.
        """
        if self.done():
            fn(self)
        else:
            self._done_callbacks.append(fn)

    def _invoke_callbacks(self):
        if self._callbacks_invoked or not self.done():
            return
        self._callbacks_invoked = True
        callbacks, self._done_callbacks = self._done_callbacks, []
        for callback in callbacks:
            callback(self)

    def _sleep_interval(self, interval):
        if interval is not None:
            return interval
        if self._state.retry_after is not None:
            return self._state.retry_after
        return self._polling_interval

    def _outcome(self):
        state = self._state
        if state.status == lro.OperationState.SUCCEEDED:
            return state.result
        raise exceptions.OperationFailedError(
            "Operation {} finished as {}".format(state.spec.name, state.status.value),
            state.status,
            error=state.error,
            response=state.last_response,
        )

    def _check_cancelable(self):
        if self._cancel_callback is None:
            raise exceptions.CancellationNotSupported(
                "Operation {} cannot be canceled".format(self._state.spec.name)
            )


class LROPoller(_BasePoller):
    """Track a long-running operation from a blocking context.

    Args:
        dispatcher (pipeline_client.dispatcher.OperationDispatcher): Sends
            the status checks.
        initial_response (pipeline_client.dispatcher.OperationResponse): The
            response of the call that started the operation.
        spec (pipeline_client.operation_spec.OperationSpec): The spec of that
            call.
        cancel_callback (Optional[Callable[[], Any]]): Asks the service to
            cancel the operation. Without it :meth:`cancel` raises
            :class:`~pipeline_client.exceptions.CancellationNotSupported`.
        retry (Optional[pipeline_client.retry.Retry]): Applied to each status
            check.
        timeout (Optional[float]): Per-request timeout for status checks.
        polling_interval (float): Seconds between status checks when the
            service sends no ``Retry-After`` hint.
    """

    def __init__(self, *args, **kwargs):
        super(LROPoller, self).__init__(*args, **kwargs)
        self._poll_lock = threading.Lock()

    @contextlib.contextmanager
    def _exclusive(self):
        if not self._poll_lock.acquire(blocking=False):
            raise RuntimeError("Poller is already being polled by another caller")
        try:
            yield
        finally:
            self._poll_lock.release()

    def poll(self):
        """Check the status of the operation once.

        Terminal states are cached: once one is reached no further requests
        are sent.

        Returns:
            pipeline_client.lro.OperationState: The resulting status.

        Raises:
            RuntimeError: If another caller is polling this instance.
        """
        with self._exclusive():
            state = self._state
            if not state.status.is_terminal:
                response = self._dispatcher.execute(
                    lro.POLL_OPERATION_SPEC,
                    state.poll_arguments(),
                    retry=self._retry,
                    timeout=self._timeout,
                )
                state.update(response)
            if state.needs_final_get:
                response = self._dispatcher.execute(
                    lro.POLL_OPERATION_SPEC,
                    state.final_arguments(),
                    retry=self._retry,
                    timeout=self._timeout,
                )
                state.resolve(response)
        self._invoke_callbacks()
        return self._state.status

    def poll_until_done(self, interval=None):
        """Poll until the operation reaches a terminal state.

        Args:
            interval (Optional[float]): Seconds between status checks.
                Defaults to the service's ``Retry-After`` hint, then to the
                poller's polling interval.

        Returns:
            pipeline_client.lro.OperationState: The terminal status.
        """
        while not self.done():
            self.poll()
            if self.done():
                break
            delay = self._sleep_interval(interval)
            _LOGGER.debug("Operation not done, sleeping %.1fs ...", delay)
            time.sleep(delay)
        return self._state.status

    def result(self, interval=None):
        """Get the result of the operation, blocking if necessary.

        Args:
            interval (Optional[float]): See :meth:`poll_until_done`.

        Returns:
            Any: The final resource, or ``None`` for operations without one.

        Raises:
            pipeline_client.exceptions.OperationFailedError: If the
                operation failed or was canceled.
        """
        self.poll_until_done(interval=interval)
        return self._outcome()

    def cancel(self):
        """Attempt to cancel the operation.

        Returns:
            bool: True if cancellation was requested, False if the operation
                had already reached a terminal state.

        Raises:
            pipeline_client.exceptions.CancellationNotSupported: If the
                operation has no cancel endpoint.
        """
        if self._state.status.is_terminal:
            return False
        self._check_cancelable()
        self._cancel_callback()
        self._state.mark_canceled()
        self._invoke_callbacks()
        return True
