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

from typing import Any, Dict, Mapping, Optional, Union

from google.auth import credentials as ga_credentials  # type: ignore

from pipeline_client import client_info as client_info_lib
from pipeline_client import client_logging
from pipeline_client import client_options as client_options_lib
from pipeline_client import dispatcher_async
from pipeline_client import models
from pipeline_client import page_iterator_async
from pipeline_client import polling_async
from pipeline_client import retry as retries
from pipeline_client.pipelines import operation_specs
from pipeline_client.pipelines.client import _client_settings
from pipeline_client.pipelines.client import _default_arguments
from pipeline_client.pipelines.client import _pipeline_or_not_modified
from pipeline_client.pipelines.client import _SERVICE_NAME
from pipeline_client.transports import AsyncRestTransport, AsyncTransport

OptionalRetry = Union[retries.AsyncRetry, None]


class PipelineAsyncClient(object):
    """Manage the pipelines of a workspace from asyncio code.

    Methods mirror :class:`~pipeline_client.pipelines.PipelineClient`;
    every call is a coroutine.

    .. code-block:: python

        async with PipelineAsyncClient(endpoint) as client:
            pipelines = await client.list_pipelines()
            async for pipeline in pipelines:
                print(pipeline.name)
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        *,
        credentials: Optional[ga_credentials.Credentials] = None,
        transport: Optional[AsyncTransport] = None,
        client_options: Optional[
            Union[client_options_lib.ClientOptions, Dict[str, Any]]
        ] = None,
        client_info: client_info_lib.ClientInfo = client_info_lib.DEFAULT_CLIENT_INFO,
    ) -> None:
        """Instantiates the async pipeline client.

        Takes the same arguments as
        :class:`~pipeline_client.pipelines.PipelineClient`, with an
        :class:`~pipeline_client.transports.AsyncTransport`. An
        :class:`~pipeline_client.transports.AsyncRestTransport` is created
        when ``transport`` is omitted.
        """
        client_logging.initialize_logging()

        client_options, endpoint, credentials = _client_settings(
            endpoint, credentials, transport, client_options
        )
        if transport is None:
            transport = AsyncRestTransport(credentials)

        self._endpoint = endpoint
        self._dispatcher = dispatcher_async.AsyncOperationDispatcher(
            transport,
            default_arguments=_default_arguments(endpoint, client_options),
            client_info=client_info,
            service_name=_SERVICE_NAME,
        )

    @property
    def transport(self) -> AsyncTransport:
        """Returns the transport used by the client instance."""
        return self._dispatcher.transport

    @property
    def api_endpoint(self) -> str:
        """str: The workspace endpoint used by the client instance."""
        return self._endpoint

    async def list_pipelines(
        self,
        *,
        page_token: Optional[str] = None,
        retry: OptionalRetry = None,
        timeout: Optional[float] = None,
    ) -> page_iterator_async.AsyncNextLinkIterator:
        r"""Lists the pipelines of the workspace.

        Args:
            page_token (Optional[str]): A next link to resume from.
            retry (pipeline_client.retry.AsyncRetry): Designation of what
                errors, if any, should be retried.
            timeout (float): The timeout for each request.

        Returns:
            pipeline_client.page_iterator_async.AsyncNextLinkIterator:
                Iterating over this object yields
                :class:`~pipeline_client.models.PipelineResource` instances
                and resolves additional pages automatically.
        """

        async def fetch_next(next_link):
            return await self._dispatcher.execute(
                operation_specs.LIST_PIPELINES_NEXT,
                {"nextLink": next_link},
                retry=retry,
                timeout=timeout,
            )

        first_response = None
        if not page_token:
            first_response = await self._dispatcher.execute(
                operation_specs.LIST_PIPELINES, {}, retry=retry, timeout=timeout
            )
        return page_iterator_async.AsyncNextLinkIterator(
            fetch_next, first_response=first_response, page_token=page_token
        )

    async def create_or_update_pipeline(
        self,
        name: str,
        pipeline: models.PipelineResource,
        *,
        if_match: Optional[str] = None,
        retry: OptionalRetry = None,
        timeout: Optional[float] = None,
        polling_interval: Optional[float] = None,
    ) -> polling_async.AsyncLROPoller:
        r"""Creates or updates a pipeline.

        Returns:
            pipeline_client.polling_async.AsyncLROPoller: Its result is the
                stored :class:`~pipeline_client.models.PipelineResource`.
        """
        return await self._begin(
            operation_specs.CREATE_OR_UPDATE_PIPELINE,
            {"pipelineName": name, "pipeline": pipeline, "ifMatch": if_match},
            retry,
            timeout,
            polling_interval,
        )

    async def get_pipeline(
        self,
        name: str,
        *,
        if_none_match: Optional[str] = None,
        retry: OptionalRetry = None,
        timeout: Optional[float] = None,
    ) -> Union[models.PipelineResource, models.NotModified]:
        r"""Gets a pipeline, or :class:`NotModified` when ``if_none_match``
        still matches."""
        response = await self._dispatcher.execute(
            operation_specs.GET_PIPELINE,
            {"pipelineName": name, "ifNoneMatch": if_none_match},
            retry=retry,
            timeout=timeout,
        )
        return _pipeline_or_not_modified(response)

    async def delete_pipeline(
        self,
        name: str,
        *,
        retry: OptionalRetry = None,
        timeout: Optional[float] = None,
        polling_interval: Optional[float] = None,
    ) -> polling_async.AsyncLROPoller:
        r"""Deletes a pipeline."""
        return await self._begin(
            operation_specs.DELETE_PIPELINE,
            {"pipelineName": name},
            retry,
            timeout,
            polling_interval,
        )

    async def rename_pipeline(
        self,
        name: str,
        new_name: str,
        *,
        retry: OptionalRetry = None,
        timeout: Optional[float] = None,
        polling_interval: Optional[float] = None,
    ) -> polling_async.AsyncLROPoller:
        r"""Renames a pipeline."""
        return await self._begin(
            operation_specs.RENAME_PIPELINE,
            {
                "pipelineName": name,
                "request": models.ArtifactRenameRequest(new_name),
            },
            retry,
            timeout,
            polling_interval,
        )

    async def create_pipeline_run(
        self,
        name: str,
        *,
        parameters: Optional[Mapping[str, Any]] = None,
        reference_pipeline_run_id: Optional[str] = None,
        is_recovery: Optional[bool] = None,
        start_activity_name: Optional[str] = None,
        retry: OptionalRetry = None,
        timeout: Optional[float] = None,
    ) -> models.CreateRunResponse:
        r"""Starts a run of a pipeline without waiting for it."""
        response = await self._dispatcher.execute(
            operation_specs.CREATE_PIPELINE_RUN,
            {
                "pipelineName": name,
                "parameters": None if parameters is None else dict(parameters),
                "referencePipelineRunId": reference_pipeline_run_id,
                "isRecovery": is_recovery,
                "startActivityName": start_activity_name,
            },
            retry=retry,
            timeout=timeout,
        )
        return response.body

    async def _begin(self, spec, arguments, retry, timeout, polling_interval):
        initial = await self._dispatcher.execute(
            spec, arguments, retry=retry, timeout=timeout
        )
        return polling_async.AsyncLROPoller(
            self._dispatcher,
            initial,
            spec,
            retry=retry,
            timeout=timeout,
            polling_interval=polling_interval,
        )

    async def close(self):
        """Release the transport and its connections."""
        await self._dispatcher.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
