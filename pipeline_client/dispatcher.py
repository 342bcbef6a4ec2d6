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

"""Execute :class:`~pipeline_client.operation_spec.OperationSpec` calls.

The dispatcher is the only place where requests are built and responses are
interpreted. Given a spec and a mapping of arguments it:

1. expands the URL, query, header and body parameters into an
   :class:`~pipeline_client.transports.base.HttpRequest`;
2. sends it through a transport, once per attempt;
3. deserializes the body with the mapper declared for the status code, or
   raises the :class:`~pipeline_client.exceptions.ServiceError` subclass
   for that status.

.. code-block:: python

    dispatcher = OperationDispatcher(
        RestTransport(credentials),
        default_arguments={"endpoint": "https://ws.example.net"},
    )
    response = dispatcher.execute(GET_PIPELINE, {"pipelineName": "etl"})
    pipeline = response.body
"""

import logging
import re
from urllib.parse import quote

from pipeline_client import exceptions
from pipeline_client import path_template
from pipeline_client import rest_helpers
from pipeline_client import serializer as serializer_lib
from pipeline_client.client_info import DEFAULT_CLIENT_INFO
from pipeline_client.transports.base import HttpRequest, header_dict

_LOGGER = logging.getLogger(__name__)

_ABSOLUTE_URL_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")

_MEDIA_TYPES = {
    "json": serializer_lib.JSON_CONTENT_TYPE,
}


class OperationResponse(object):
    """The outcome of a successfully mapped call.

    Args:
        status_code (int): The HTTP status code.
        headers (Mapping[str, str]): The response headers.
        body (Any): The deserialized body, or ``None`` when the status code
            declares no body shape or the body is empty.
        response (pipeline_client.transports.base.HttpResponse): The raw
            response.
        request (pipeline_client.transports.base.HttpRequest): The request
            that produced it.
    """

    def __init__(self, status_code, headers, body, response, request):
        self.status_code = status_code
        self.headers = headers
        self.body = body
        self.response = response
        self.request = request

    def __repr__(self):
        return "<OperationResponse [{}] {!r}>".format(self.status_code, self.body)


class _BaseDispatcher(object):
    """Request building and response mapping shared by both dispatchers.

    Args:
        transport: The transport requests are sent through.
        default_arguments (Optional[Mapping[str, Any]]): Values used for any
            parameter a call does not supply, typically ``endpoint`` and
            ``apiVersion``.
        client_info (Optional[pipeline_client.client_info.ClientInfo]): Used
            to render the ``User-Agent`` header.
        serializer (Optional[pipeline_client.serializer.Serializer]): The
            body codec.
        service_name (Optional[str]): Reported in structured logs.
    """

    def __init__(
        self,
        transport,
        default_arguments=None,
        client_info=None,
        serializer=None,
        service_name=None,
    ):
        self._transport = transport
        self._default_arguments = dict(default_arguments or {})
        self._client_info = client_info or DEFAULT_CLIENT_INFO
        self._serializer = serializer or serializer_lib.Serializer()
        self._service_name = service_name

    @property
    def transport(self):
        """The transport used by this dispatcher."""
        return self._transport

    @property
    def serializer(self):
        """pipeline_client.serializer.Serializer: The body codec."""
        return self._serializer

    def _value_for(self, spec, param, arguments):
        value = arguments.get(param.name)
        if value is None:
            value = self._default_arguments.get(param.name)
        if value is None:
            value = param.constant
        if value is None and param.required:
            raise ValueError(
                "Operation {} requires parameter '{}'".format(spec.name, param.name)
            )
        return value

    def build_request(self, spec, arguments):
        """Build the HTTP request for one call.

        Args:
            spec (pipeline_client.operation_spec.OperationSpec): The operation.
            arguments (Mapping[str, Any]): The call's parameter values.

        Returns:
            pipeline_client.transports.base.HttpRequest: The request.

        Raises:
            ValueError: If a required parameter has no value.
        """
        url_values = {}
        for param in spec.url_parameters:
            value = self._value_for(spec, param, arguments)
            if value is None:
                continue
            value = str(value)
            if not param.skip_encoding:
                value = quote(value, safe="")
            url_values[param.wire_name] = value

        path = path_template.expand(spec.path, **url_values)
        if _ABSOLUTE_URL_RE.match(path):
            url = path
        else:
            url = path_template.expand(spec.base_url, **url_values) + path

        query = {}
        for param in spec.query_parameters:
            value = self._value_for(spec, param, arguments)
            if value is not None:
                query[param.wire_name] = value
        url = rest_helpers.merge_query(
            url, rest_helpers.flatten_query_params(query, strict=True)
        )

        headers = {"User-Agent": self._client_info.to_user_agent()}
        for param in spec.header_parameters:
            value = self._value_for(spec, param, arguments)
            if value is not None:
                headers[param.wire_name] = str(value)

        body = None
        if spec.request_body is not None:
            value = self._value_for(spec, spec.request_body, arguments)
            if value is not None:
                body = self._serializer.serialize(value)
                headers["Content-Type"] = _MEDIA_TYPES.get(
                    spec.media_type, serializer_lib.JSON_CONTENT_TYPE
                )

        return HttpRequest(spec.http_method, url, headers=headers, body=body)

    def map_response(self, spec, request, response):
        """Interpret a response according to ``spec``.

        Args:
            spec (pipeline_client.operation_spec.OperationSpec): The operation.
            request (HttpRequest): The request that was sent.
            response (HttpResponse): The response received.

        Returns:
            OperationResponse: For a status code listed in ``spec.responses``.

        Raises:
            pipeline_client.exceptions.ServiceError: For any other status code.
            pipeline_client.exceptions.DeserializationError: If a listed
                status code carries a body of the wrong shape.
        """
        response_spec = spec.responses.get(response.status_code)
        if response_spec is None:
            raise self._service_error(spec, request, response)

        body = None
        if response_spec.body_mapper is not None:
            body = self._serializer.deserialize(
                response_spec.body_mapper, response.content
            )
        return OperationResponse(
            response.status_code, response.headers, body, response, request
        )

    def _service_error(self, spec, request, response):
        error = None
        error_spec = spec.error_response
        if error_spec is not None and error_spec.body_mapper is not None:
            try:
                error = self._serializer.deserialize(
                    error_spec.body_mapper, response.content
                )
            except exceptions.DeserializationError as exc:
                _LOGGER.debug(
                    "Error body of %s is not a %s: %s",
                    spec.name,
                    error_spec.body_mapper.__name__,
                    exc,
                )
        return exceptions.from_http_response(response, request, error=error)

    def _log_request(self, spec, request):
        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug(
                "Sending request for %s",
                spec.name,
                extra={
                    "serviceName": self._service_name,
                    "rpcName": spec.name,
                    "httpRequest": {
                        "method": request.method,
                        "url": request.url,
                        "headers": header_dict(request.headers),
                    },
                },
            )

    def _log_response(self, spec, response):
        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug(
                "Received response for %s",
                spec.name,
                extra={
                    "serviceName": self._service_name,
                    "rpcName": spec.name,
                    "httpResponse": {
                        "status": response.status_code,
                        "headers": header_dict(response.headers),
                    },
                },
            )


class OperationDispatcher(_BaseDispatcher):
    """Execute operations through a blocking :class:`Transport`."""

    def execute(self, spec, arguments=None, *, retry=None, timeout=None):
        """Run one operation.

        Args:
            spec (pipeline_client.operation_spec.OperationSpec): The operation.
            arguments (Optional[Mapping[str, Any]]): The call's parameter
                values.
            retry (Optional[pipeline_client.retry.Retry]): Wraps each attempt
                (send plus response mapping). Without it the request is sent
                exactly once.
            timeout (Optional[float]): Per-attempt timeout in seconds, passed
                to the transport.

        Returns:
            OperationResponse: The mapped response.

        Raises:
            ValueError: If a required parameter has no value. Nothing is
                sent in that case.
            pipeline_client.exceptions.ServiceError: For an unlisted status.
            pipeline_client.exceptions.TransportError: If no response was
                received.
        """
        request = self.build_request(spec, arguments or {})

        def attempt():
            self._log_request(spec, request)
            response = self._transport.send(request, timeout=timeout)
            self._log_response(spec, response)
            return self.map_response(spec, request, response)

        if retry is not None:
            attempt = retry(attempt)
        return attempt()

    def close(self):
        self._transport.close()
