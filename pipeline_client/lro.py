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

"""State tracking for long-running operations.

A write that the service completes asynchronously answers with a polling
location instead of (or as well as) the final resource. :class:`LROState`
interprets the initial response and each status response, without doing any
I/O, so the blocking and asyncio pollers only differ in how they send
requests and sleep.

Three polling styles are understood, in order of preference:

- ``Azure-AsyncOperation`` header: a status monitor whose body carries
  ``status``. For ``PUT``/``PATCH`` the resource is read again once the
  monitor reports success.
- ``Location`` header: a URL that answers ``202`` while the operation runs
  and the final body once it is done.
- Resource body: for ``PUT``/``PATCH`` only, the resource itself reports
  ``properties.provisioningState``. Any other verb answering ``202`` without
  a polling header is complete.
"""

import enum
import logging

from pipeline_client import models
from pipeline_client import operation_spec
from pipeline_client import rest_helpers
from pipeline_client import serializer as serializer_lib

_LOGGER = logging.getLogger(__name__)

DEFAULT_POLLING_INTERVAL = 2.0  # seconds

ASYNC_OPERATION_HEADER = "Azure-AsyncOperation"
LOCATION_HEADER = "Location"

_SUCCESS_CODES = (200, 201, 202, 204)

POLL_OPERATION_SPEC = operation_spec.OperationSpec(
    name="pollOperation",
    path="{pollingUrl}",
    http_method="GET",
    base_url="",
    responses={
        200: operation_spec.ResponseSpec(),
        201: operation_spec.ResponseSpec(),
        202: operation_spec.ResponseSpec(),
        204: operation_spec.ResponseSpec(),
        operation_spec.DEFAULT_RESPONSE: operation_spec.ResponseSpec(
            models.CloudError
        ),
    },
    url_parameters=(
        operation_spec.Parameter(
            "pollingUrl",
            operation_spec.ParameterLocation.URL,
            required=True,
            skip_encoding=True,
        ),
    ),
    header_parameters=(
        operation_spec.Parameter(
            "accept",
            operation_spec.ParameterLocation.HEADER,
            serialized_name="Accept",
            constant=serializer_lib.JSON_CONTENT_TYPE,
        ),
    ),
)
"""Status checks and final reads: a GET on an absolute URL."""


class OperationState(enum.Enum):
    """Status of a long-running operation."""

    NOT_STARTED = "NotStarted"
    IN_PROGRESS = "InProgress"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    CANCELED = "Canceled"

    @property
    def is_terminal(self):
        return self in _TERMINAL_STATES

    @classmethod
    def from_service(cls, value):
        """Map a status string reported by the service.

        Unknown strings, such as resource specific states like
        ``Provisioning``, count as :attr:`IN_PROGRESS`.
        """
        return _SERVICE_STATES.get(value.lower(), cls.IN_PROGRESS)


_TERMINAL_STATES = frozenset(
    [OperationState.SUCCEEDED, OperationState.FAILED, OperationState.CANCELED]
)

_SERVICE_STATES = {
    "notstarted": OperationState.NOT_STARTED,
    "inprogress": OperationState.IN_PROGRESS,
    "running": OperationState.IN_PROGRESS,
    "succeeded": OperationState.SUCCEEDED,
    "failed": OperationState.FAILED,
    "canceled": OperationState.CANCELED,
    "cancelled": OperationState.CANCELED,
}


class PollingMode(enum.Enum):
    """How the status of an operation is observed."""

    ASYNC_OPERATION = "async-operation"
    LOCATION = "location"
    BODY = "body"


def _status_from_document(document):
    if not isinstance(document, dict):
        return None
    status = document.get("status")
    if status is None:
        properties = document.get("properties")
        if isinstance(properties, dict):
            status = properties.get("provisioningState")
    if not isinstance(status, str):
        return None
    return OperationState.from_service(status)


def _status_from_code(status_code):
    if status_code == 202:
        return OperationState.IN_PROGRESS
    return OperationState.SUCCEEDED


def _error_from_document(document):
    if not isinstance(document, dict):
        return None
    error = document.get("error")
    if not isinstance(error, dict):
        properties = document.get("properties")
        if isinstance(properties, dict):
            error = properties.get("error")
    if not isinstance(error, dict):
        return None
    return models.CloudError(
        code=error.get("code"),
        message=error.get("message"),
        target=error.get("target"),
        details=error.get("details"),
    )


def _success_mapper(spec):
    for code in _SUCCESS_CODES:
        response_spec = spec.responses.get(code)
        if response_spec is not None and response_spec.body_mapper is not None:
            return response_spec.body_mapper
    return None


class LROState(object):
    """The state of one long-running operation.

    The state is owned by a single poller; it is never shared.

    Args:
        initial (pipeline_client.dispatcher.OperationResponse): The mapped
            response of the call that started the operation.
        spec (pipeline_client.operation_spec.OperationSpec): The spec of
            that call; its success mapper deserializes the final result.
        serializer (Optional[pipeline_client.serializer.Serializer]): Body
            codec.
    """

    def __init__(self, initial, spec, serializer=None):
        self._serializer = serializer or serializer_lib.Serializer()
        self.initial_response = initial
        self.spec = spec
        self.status = OperationState.NOT_STARTED
        self.mode = None
        self.polling_url = None
        self.final_url = None
        self.retry_after = rest_helpers.parse_retry_after(initial.headers)
        self.last_response = initial.response
        self.result = None
        self.error = None
        self._result_resolved = False
        self._last_document = None

        self._start(initial)

    @property
    def resource_url(self):
        """str: The URL of the request that started the operation."""
        return self.initial_response.request.url

    @property
    def http_method(self):
        return self.initial_response.request.method.upper()

    @property
    def needs_final_get(self):
        """bool: Whether success was reported but the result must still be read."""
        return (
            self.status == OperationState.SUCCEEDED
            and not self._result_resolved
            and self.final_url is not None
        )

    @property
    def done(self):
        """bool: Whether the operation is terminal and its outcome is known."""
        return self.status.is_terminal and not self.needs_final_get

    def _start(self, initial):
        headers = initial.headers
        document = self._serializer.parse(initial.response.content)
        self._last_document = document

        if headers.get(ASYNC_OPERATION_HEADER):
            self.mode = PollingMode.ASYNC_OPERATION
            self.polling_url = headers[ASYNC_OPERATION_HEADER]
            if self.http_method in ("PUT", "PATCH"):
                self.final_url = self.resource_url
            elif self.http_method in ("POST", "DELETE"):
                self.final_url = headers.get(LOCATION_HEADER)
            self._set_status(OperationState.IN_PROGRESS)
            return

        if headers.get(LOCATION_HEADER):
            self.mode = PollingMode.LOCATION
            self.polling_url = headers[LOCATION_HEADER]
            self._set_status(OperationState.IN_PROGRESS)
            return

        body_status = _status_from_document(document)
        # Only a PUT or PATCH target can be re-read for its status; a 202 to
        # any other verb without a polling header has nothing to poll.
        if self.http_method in ("PUT", "PATCH") and (
            initial.status_code == 202
            or (body_status is not None and not body_status.is_terminal)
        ):
            self.mode = PollingMode.BODY
            self.polling_url = self.resource_url
            self._set_status(OperationState.IN_PROGRESS)
            return

        # Completed synchronously.
        if body_status in (OperationState.FAILED, OperationState.CANCELED):
            self.error = _error_from_document(document)
            self._set_status(body_status)
            return
        self.result = initial.body
        self._result_resolved = True
        self._set_status(OperationState.SUCCEEDED)

    def _set_status(self, status):
        if status != self.status:
            _LOGGER.debug(
                "Operation %s moved from %s to %s",
                self.spec.name,
                self.status.value,
                status.value,
            )
        self.status = status

    def poll_arguments(self):
        """Dict[str, str]: Arguments for :data:`POLL_OPERATION_SPEC`."""
        return {"pollingUrl": self.polling_url}

    def final_arguments(self):
        """Dict[str, str]: Arguments reading the final result."""
        return {"pollingUrl": self.final_url}

    def update(self, poll_response):
        """Record the response of one status check.

        Args:
            poll_response (pipeline_client.dispatcher.OperationResponse):
                The mapped response of :data:`POLL_OPERATION_SPEC`.

        Returns:
            OperationState: The resulting status.
        """
        if self.status.is_terminal:
            return self.status

        headers = poll_response.headers
        self.last_response = poll_response.response
        retry_after = rest_helpers.parse_retry_after(headers)
        if retry_after is not None:
            self.retry_after = retry_after

        if self.mode == PollingMode.ASYNC_OPERATION:
            new_url = headers.get(ASYNC_OPERATION_HEADER)
        else:
            new_url = headers.get(ASYNC_OPERATION_HEADER) or headers.get(
                LOCATION_HEADER
            )
        if new_url:
            self.polling_url = new_url

        document = self._serializer.parse(poll_response.response.content)
        self._last_document = document

        status = _status_from_document(document)
        if status is None:
            status = _status_from_code(poll_response.status_code)
        if status == OperationState.NOT_STARTED:
            status = OperationState.IN_PROGRESS

        if status in (OperationState.FAILED, OperationState.CANCELED):
            self.error = _error_from_document(document)
        elif status == OperationState.SUCCEEDED and self.final_url is None:
            self._resolve_from_document(document, poll_response.response.content)

        self._set_status(status)
        return self.status

    def resolve(self, final_response):
        """Record the response of the final read of the result.

        Args:
            final_response (pipeline_client.dispatcher.OperationResponse):
                The mapped response of the read of :attr:`final_url`.
        """
        self.last_response = final_response.response
        content = final_response.response.content
        self._resolve_from_document(self._serializer.parse(content), content)

    def _resolve_from_document(self, document, content):
        if self.mode == PollingMode.ASYNC_OPERATION and self.final_url is None:
            # The status monitor body is not the result.
            document = None
        mapper = _success_mapper(self.spec)
        if document is None or mapper is None:
            self.result = None
        else:
            self.result = self._serializer.from_document(mapper, document, content)
        self._result_resolved = True

    def mark_canceled(self):
        """Move a non-terminal operation to :attr:`OperationState.CANCELED`."""
        if self.status.is_terminal:
            return
        self._set_status(OperationState.CANCELED)
