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

"""AsyncIO counterpart of :mod:`pipeline_client.dispatcher`."""

from pipeline_client.dispatcher import _BaseDispatcher
from pipeline_client.dispatcher import OperationResponse  # noqa: F401


class AsyncOperationDispatcher(_BaseDispatcher):
    """Execute operations through an :class:`AsyncTransport`."""

    async def execute(self, spec, arguments=None, *, retry=None, timeout=None):
        """Run one operation.

        Args:
            spec (pipeline_client.operation_spec.OperationSpec): The operation.
            arguments (Optional[Mapping[str, Any]]): The call's parameter
                values.
            retry (Optional[pipeline_client.retry.AsyncRetry]): Wraps each
                attempt. Without it the request is sent exactly once.
            timeout (Optional[float]): Per-attempt timeout in seconds.

        Returns:
            OperationResponse: The mapped response.
        """
        request = self.build_request(spec, arguments or {})

        async def attempt():
            self._log_request(spec, request)
            response = await self._transport.send(request, timeout=timeout)
            self._log_response(spec, response)
            return self.map_response(spec, request, response)

        if retry is not None:
            attempt = retry(attempt)
        return await attempt()

    async def close(self):
        await self._transport.close()
