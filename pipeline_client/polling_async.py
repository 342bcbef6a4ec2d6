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

"""AsyncIO poller for long-running operations.

.. code-block:: python

    poller = await client.create_or_update_pipeline("etl", pipeline)
    pipeline = await poller.result()
"""

import asyncio
import logging

from pipeline_client import lro
from pipeline_client.polling import _BasePoller

_LOGGER = logging.getLogger(__name__)


class AsyncLROPoller(_BasePoller):
    """Track a long-running operation from a coroutine.

    Takes the same arguments as :class:`~pipeline_client.polling.LROPoller`,
    with an
    :class:`~pipeline_client.dispatcher_async.AsyncOperationDispatcher`, an
    optional coroutine function as ``cancel_callback`` and an
    :class:`~pipeline_client.retry.AsyncRetry`.
    """

    def __init__(self, *args, **kwargs):
        super(AsyncLROPoller, self).__init__(*args, **kwargs)
        self._polling = False

    async def poll(self):
        """Check the status of the operation once.

        Returns:
            pipeline_client.lro.OperationState: The resulting status.

        Raises:
            RuntimeError: If another task is polling this instance.
        """
        if self._polling:
            raise RuntimeError("Poller is already being polled by another task")
        self._polling = True
        try:
            state = self._state
            if not state.status.is_terminal:
                response = await self._dispatcher.execute(
                    lro.POLL_OPERATION_SPEC,
                    state.poll_arguments(),
                    retry=self._retry,
                    timeout=self._timeout,
                )
                state.update(response)
            if state.needs_final_get:
                response = await self._dispatcher.execute(
                    lro.POLL_OPERATION_SPEC,
                    state.final_arguments(),
                    retry=self._retry,
                    timeout=self._timeout,
                )
                state.resolve(response)
        finally:
            self._polling = False
        self._invoke_callbacks()
        return self._state.status

    async def poll_until_done(self, interval=None):
        """Poll until the operation reaches a terminal state.

        Args:
            interval (Optional[float]): Seconds between status checks.

        Returns:
            pipeline_client.lro.OperationState: The terminal status.
        """
        while not self.done():
            await self.poll()
            if self.done():
                break
            delay = self._sleep_interval(interval)
            _LOGGER.debug("Operation not done, sleeping %.1fs ...", delay)
            await asyncio.sleep(delay)
        return self._state.status

    async def result(self, interval=None):
        """Wait for the operation and return its result.

        Raises:
            pipeline_client.exceptions.OperationFailedError: If the
                operation failed or was canceled.
        """
        await self.poll_until_done(interval=interval)
        return self._outcome()

    async def cancel(self):
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
        await self._cancel_callback()
        self._state.mark_canceled()
        self._invoke_callbacks()
        return True
