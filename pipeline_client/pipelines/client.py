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
from pipeline_client import dispatcher as dispatcher_lib
from pipeline_client import models
from pipeline_client import page_iterator
from pipeline_client import polling
from pipeline_client import retry as retries
from pipeline_client.pipelines import operation_specs
from pipeline_client.transports import RestTransport, Transport

OptionalRetry = Union[retries.Retry, None]

_SERVICE_NAME = "pipelines"


def _client_settings(endpoint, credentials, transport, client_options):
    """Resolve the options shared by the blocking and asyncio clients.

    Returns:
        Tuple[ClientOptions, str, Optional[Credentials]]: The options, the
            endpoint and, when no transport was given, the credentials.
    """
    if isinstance(client_options, dict):
        client_options = client_options_lib.from_dict(client_options)
    if client_options is None:
        client_options = client_options_lib.ClientOptions()

    resolved_endpoint = client_options_lib.resolve_endpoint(client_options, endpoint)

    if transport is not None:
        if credentials is not None or client_options.credentials_file is not None:
            raise ValueError(
                "When providing a transport instance, "
                "provide its credentials directly."
            )
        return client_options, resolved_endpoint, None

    credentials = client_options_lib.resolve_credentials(client_options, credentials)
    return client_options, resolved_endpoint, credentials


def _default_arguments(endpoint, client_options):
    arguments = {"endpoint": endpoint}
    if client_options.api_version is not None:
        arguments["apiVersion"] = client_options.api_version
    return arguments


class PipelineClient(object):
    """Manage the pipelines of a workspace.

    .. code-block:: python

        with PipelineClient("https://myworkspace.dev.azuresynapse.net",
                            credentials=credentials) as client:
            for pipeline in client.list_pipelines():
                print(pipeline.name)
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        *,
        credentials: Optional[ga_credentials.Credentials] = None,
        transport: Optional[Transport] = None,
        client_options: Optional[
            Union[client_options_lib.ClientOptions, Dict[str, Any]]
        ] = None,
        client_info: client_info_lib.ClientInfo = client_info_lib.DEFAULT_CLIENT_INFO,
    ) -> None:
        """Instantiates the pipeline client.

        Args:
            endpoint (Optional[str]): The workspace endpoint, for example
                ``https://myworkspace.dev.azuresynapse.net``. Overridden by
                ``client_options.api_endpoint``; read from the
                ``PIPELINE_CLIENT_ENDPOINT`` environment variable when
                neither is set.
            credentials (Optional[google.auth.credentials.Credentials]): The
                authorization credentials to attach to requests. Anonymous
                credentials are used when none are specified and no
                ``credentials_file`` is configured.
            transport (Optional[Transport]): The transport to use. A
                :class:`RestTransport` is created when omitted.
            client_options (Optional[Union[ClientOptions, dict]]): Custom
                options for the client.
            client_info (pipeline_client.client_info.ClientInfo): The client
                info used to send a user-agent string along with API
                requests.

        Raises:
            ValueError: If no endpoint is configured, or ``transport`` is
                given together with credentials.
            pipeline_client.exceptions.DuplicateCredentialArgs: If both
                ``credentials`` and ``client_options.credentials_file`` are
                given.
        """
        client_logging.initialize_logging()

        client_options, endpoint, credentials = _client_settings(
            endpoint, credentials, transport, client_options
        )
        if transport is None:
            transport = RestTransport(credentials)

        self._endpoint = endpoint
        self._dispatcher = dispatcher_lib.OperationDispatcher(
            transport,
            default_arguments=_default_arguments(endpoint, client_options),
            client_info=client_info,
            service_name=_SERVICE_NAME,
        )

    @property
    def transport(self) -> Transport:
        """Returns the transport used by the client instance."""
        return self._dispatcher.transport

    @property
    def api_endpoint(self) -> str:
        """str: The workspace endpoint used by the client instance."""
        return self._endpoint

    def list_pipelines(
        self,
        *,
        page_token: Optional[str] = None,
        retry: OptionalRetry = None,
        timeout: Optional[float] = None,
    ) -> page_iterator.NextLinkIterator:
        r"""Lists the pipelines of the workspace.

        Args:
            page_token (Optional[str]): A next link returned by an earlier
                listing, to resume from.
            retry (pipeline_client.retry.Retry): Designation of what errors,
                if any, should be retried.
            timeout (float): The timeout for each request.

        Returns:
            pipeline_client.page_iterator.NextLinkIterator:
                Iterating over this object yields
                :class:`~pipeline_client.models.PipelineResource` instances
                and resolves additional pages automatically.
        """

        def fetch_next(next_link):
            return self._dispatcher.execute(
                operation_specs.LIST_PIPELINES_NEXT,
                {"nextLink": next_link},
                retry=retry,
                timeout=timeout,
            )

        first_response = None
        if not page_token:
            first_response = self._dispatcher.execute(
                operation_specs.LIST_PIPELINES, {}, retry=retry, timeout=timeout
            )
        return page_iterator.NextLinkIterator(
            fetch_next, first_response=first_response, page_token=page_token
        )

    def create_or_update_pipeline(
        self,
        name: str,
        pipeline: models.PipelineResource,
        *,
        if_match: Optional[str] = None,
        retry: OptionalRetry = None,
        timeout: Optional[float] = None,
        polling_interval: Optional[float] = None,
    ) -> polling.LROPoller:
        r"""Creates or updates a pipeline.

        Args:
            name (str): The pipeline name.
            pipeline (pipeline_client.models.PipelineResource): The
                definition.
            if_match (Optional[str]): ETag of the pipeline entity. Should
                only be specified for update, for which it should match the
                existing entity, or can be ``*`` for unconditional update.
            retry (pipeline_client.retry.Retry): Designation of what errors,
                if any, should be retried. Applies to status checks as well.
            timeout (float): The timeout for each request.
            polling_interval (Optional[float]): Seconds between status checks
                when the service sends no ``Retry-After`` hint.

        Returns:
            pipeline_client.polling.LROPoller: Its result is the stored
                :class:`~pipeline_client.models.PipelineResource`.
        """
        return self._begin(
            operation_specs.CREATE_OR_UPDATE_PIPELINE,
            {"pipelineName": name, "pipeline": pipeline, "ifMatch": if_match},
            retry,
            timeout,
            polling_interval,
        )

    def get_pipeline(
        self,
        name: str,
        *,
        if_none_match: Optional[str] = None,
        retry: OptionalRetry = None,
        timeout: Optional[float] = None,
    ) -> Union[models.PipelineResource, models.NotModified]:
        r"""Gets a pipeline.

        Args:
            name (str): The pipeline name.
            if_none_match (Optional[str]): ETag of the pipeline entity. The
                body is only returned when the stored entity has a different
                ETag.
            retry (pipeline_client.retry.Retry): Designation of what errors,
                if any, should be retried.
            timeout (float): The timeout for this request.

        Returns:
            Union[PipelineResource, NotModified]: The pipeline, or
                :class:`~pipeline_client.models.NotModified` when
                ``if_none_match`` still matches.

        Raises:
            pipeline_client.exceptions.NotFound: If the pipeline does not
                exist.
        """
        response = self._dispatcher.execute(
            operation_specs.GET_PIPELINE,
            {"pipelineName": name, "ifNoneMatch": if_none_match},
            retry=retry,
            timeout=timeout,
        )
        return _pipeline_or_not_modified(response)

    def delete_pipeline(
        self,
        name: str,
        *,
        retry: OptionalRetry = None,
        timeout: Optional[float] = None,
        polling_interval: Optional[float] = None,
    ) -> polling.LROPoller:
        r"""Deletes a pipeline.

        Args:
            name (str): The pipeline name.
            retry (pipeline_client.retry.Retry): Designation of what errors,
                if any, should be retried.
            timeout (float): The timeout for each request.
            polling_interval (Optional[float]): Seconds between status checks.

        Returns:
            pipeline_client.polling.LROPoller: Its result is ``None``.
        """
        return self._begin(
            operation_specs.DELETE_PIPELINE,
            {"pipelineName": name},
            retry,
            timeout,
            polling_interval,
        )

    def rename_pipeline(
        self,
        name: str,
        new_name: str,
        *,
        retry: OptionalRetry = None,
        timeout: Optional[float] = None,
        polling_interval: Optional[float] = None,
    ) -> polling.LROPoller:
        r"""Renames a pipeline.

        Args:
            name (str): The current pipeline name.
            new_name (str): The new pipeline name.
            retry (pipeline_client.retry.Retry): Designation of what errors,
                if any, should be retried.
            timeout (float): The timeout for each request.
            polling_interval (Optional[float]): Seconds between status checks.

        Returns:
            pipeline_client.polling.LROPoller: Its result is ``None``.
        """
        return self._begin(
            operation_specs.RENAME_PIPELINE,
            {
                "pipelineName": name,
                "request": models.ArtifactRenameRequest(new_name),
            },
            retry,
            timeout,
            polling_interval,
        )

    def create_pipeline_run(
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
        r"""Starts a run of a pipeline.

        The run is queued by the service; this call does not wait for it.

        Args:
            name (str): The pipeline name.
            parameters (Optional[Mapping[str, Any]]): Values of the
                pipeline's parameters, keyed by parameter name.
            reference_pipeline_run_id (Optional[str]): The run to rerun. When
                given, the parameters of that run are used.
            is_recovery (Optional[bool]): Recovery mode flag. In recovery
                mode the new run is grouped under the referenced run.
            start_activity_name (Optional[str]): In recovery mode, the rerun
                starts from this activity.
            retry (pipeline_client.retry.Retry): Designation of what errors,
                if any, should be retried.
            timeout (float): The timeout for this request.

        Returns:
            pipeline_client.models.CreateRunResponse: Holds the ``run_id``.
        """
        response = self._dispatcher.execute(
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

    def _begin(self, spec, arguments, retry, timeout, polling_interval):
        initial = self._dispatcher.execute(
            spec, arguments, retry=retry, timeout=timeout
        )
        return polling.LROPoller(
            self._dispatcher,
            initial,
            spec,
            retry=retry,
            timeout=timeout,
            polling_interval=polling_interval,
        )

    def close(self):
        """Release the transport and its connections."""
        self._dispatcher.close()

    def __enter__(self):
        return self

    def __exit__(self, type, value, traceback):
        """Releases underlying transport's resources.

        .. warning::
            ONLY use as a context manager if the transport is NOT shared
            with other clients! Exiting the with block will CLOSE the transport
            and may cause errors in other clients!
        """
        self.close()


def _pipeline_or_not_modified(response):
    if response.status_code == models.NotModified.status_code:
        return models.NotModified(
            etag=response.headers.get("ETag"), headers=response.headers
        )
    return response.body
