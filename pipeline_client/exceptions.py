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

"""Exceptions raised by the pipeline client.

This module provides base classes for all errors raised by the library, and
a set of HTTP-status specific subclasses of :class:`ServiceError` so that
callers can catch the failures they care about (for example
:class:`NotFound`) without inspecting status codes by hand.
"""

from __future__ import annotations

import http.client
import json
from typing import Dict, Optional, Type

_HTTP_CODE_TO_EXCEPTION: Dict[int, Type["ServiceError"]] = {}


class APIError(Exception):
    """Base class for all exceptions raised by the pipeline client."""

    pass


class DuplicateCredentialArgs(APIError):
    """Raised when multiple credentials are passed."""

    pass


class TransportError(APIError):
    """The request could not be delivered or no response was received.

    Raised for connection failures, timeouts and other errors that happen
    below the HTTP layer. The original exception is available as
    ``__cause__`` and as :attr:`cause`.
    """

    def __init__(self, message, cause=None):
        super(TransportError, self).__init__(message)
        self.message = message
        self._cause = cause

    @property
    def cause(self):
        """The exception raised by the underlying HTTP library."""
        return self._cause

    def __str__(self):
        return "{}, caused by {}".format(self.message, self._cause)


class DeserializationError(APIError):
    """A response body did not match the shape expected for its status code.

    Args:
        message (str): The exception message.
        content (bytes): The raw body that could not be deserialized.
    """

    def __init__(self, message, content=None):
        super(DeserializationError, self).__init__(message)
        self.message = message
        self.content = content


class RetryError(APIError):
    """Raised when a function has exhausted all of its available retries.

    Args:
        message (str): The exception message.
        cause (Exception): The last exception raised when retrying the
            function.
    """

    def __init__(self, message, cause):
        super(RetryError, self).__init__(message)
        self.message = message
        self._cause = cause

    @property
    def cause(self):
        """The last exception raised when retrying the function."""
        return self._cause

    def __str__(self):
        return "{}, last exception: {}".format(self.message, self.cause)


class CancellationNotSupported(APIError):
    """The long-running operation does not expose a cancel endpoint."""

    pass


class OperationFailedError(APIError):
    """A long-running operation finished in the ``Failed`` or ``Canceled`` state.

    Args:
        message (str): The exception message.
        state (pipeline_client.lro.OperationState): The terminal state.
        error (Optional[pipeline_client.models.CloudError]): The error
            reported by the service, if any.
        response (Optional[pipeline_client.transports.base.HttpResponse]):
            The last polling response.
    """

    def __init__(self, message, state, error=None, response=None):
        super(OperationFailedError, self).__init__(message)
        self.message = message
        self.state = state
        self.error = error
        self._response = response

    @property
    def response(self):
        """Optional[HttpResponse]: The last polling response."""
        return self._response

    def __str__(self):
        if self.error is not None:
            return "{} ({}: {})".format(self.message, self.error.code, self.error.message)
        return self.message


class _ServiceErrorMeta(type):
    """Metaclass for registering ServiceError subclasses."""

    def __new__(mcs, name, bases, class_dict):
        cls = type.__new__(mcs, name, bases, class_dict)
        if cls.code is not None:
            _HTTP_CODE_TO_EXCEPTION.setdefault(cls.code, cls)
        return cls


class ServiceError(APIError, metaclass=_ServiceErrorMeta):
    """Base class for exceptions raised for a non-success HTTP response.

    Args:
        message (str): The exception message.
        error (Optional[pipeline_client.models.CloudError]): The structured
            error payload returned by the service.
        response (Optional[pipeline_client.transports.base.HttpResponse]):
            The response that caused this error.
    """

    code: Optional[int] = None
    """Optional[int]: The HTTP status code associated with this error.

    This may be ``None`` if the exception does not have a direct mapping
    to an HTTP error.

    See http://www.w3.org/Protocols/rfc2616/rfc2616-sec10.html
    """

    def __init__(self, message, error=None, response=None):
        super(ServiceError, self).__init__(message)
        self.message = message
        """str: The exception message."""
        self._error = error
        self._response = response

    def __str__(self):
        if self.error_code:
            return "{} {} ({})".format(self.code, self.message, self.error_code)
        return "{} {}".format(self.code, self.message)

    @property
    def error(self):
        """Optional[CloudError]: The structured error returned by the service."""
        return self._error

    @property
    def error_code(self):
        """Optional[str]: The service-specific error code, e.g. ``PipelineNotFound``."""
        if self._error is None:
            return None
        return self._error.code

    @property
    def response(self):
        """Optional[HttpResponse]: The response that caused this error."""
        return self._response


class Redirection(ServiceError):
    """Base class for for all redirection (HTTP 3xx) responses."""


class ClientError(ServiceError):
    """Base class for all client error (HTTP 4xx) responses."""


class BadRequest(ClientError):
    """Exception mapping a ``400 Bad Request`` response."""

    code = http.client.BAD_REQUEST


class Unauthorized(ClientError):
    """Exception mapping a ``401 Unauthorized`` response."""

    code = http.client.UNAUTHORIZED


class Forbidden(ClientError):
    """Exception mapping a ``403 Forbidden`` response."""

    code = http.client.FORBIDDEN


class NotFound(ClientError):
    """Exception mapping a ``404 Not Found`` response."""

    code = http.client.NOT_FOUND


class MethodNotAllowed(ClientError):
    """Exception mapping a ``405 Method Not Allowed`` response."""

    code = http.client.METHOD_NOT_ALLOWED


class Conflict(ClientError):
    """Exception mapping a ``409 Conflict`` response."""

    code = http.client.CONFLICT


class PreconditionFailed(ClientError):
    """Exception mapping a ``412 Precondition Failed`` response.

    Raised when an ``If-Match`` etag no longer matches the stored resource.
    """

    code = http.client.PRECONDITION_FAILED


class TooManyRequests(ClientError):
    """Exception mapping a ``429 Too Many Requests`` response."""

    code = http.client.TOO_MANY_REQUESTS


class ServerError(ServiceError):
    """Base for 5xx responses."""


class InternalServerError(ServerError):
    """Exception mapping a ``500 Internal Server Error`` response."""

    code = http.client.INTERNAL_SERVER_ERROR


class BadGateway(ServerError):
    """Exception mapping a ``502 Bad Gateway`` response."""

    code = http.client.BAD_GATEWAY


class ServiceUnavailable(ServerError):
    """Exception mapping a ``503 Service Unavailable`` response."""

    code = http.client.SERVICE_UNAVAILABLE


class GatewayTimeout(ServerError):
    """Exception mapping a ``504 Gateway Timeout`` response."""

    code = http.client.GATEWAY_TIMEOUT


def exception_class_for_http_status(status_code):
    """Return the exception class for a specific HTTP status code.

    Args:
        status_code (int): The HTTP status code.

    Returns:
        :func:`type`: the appropriate subclass of :class:`ServiceError`.
    """
    return _HTTP_CODE_TO_EXCEPTION.get(status_code, ServiceError)


def from_http_status(status_code, message, **kwargs):
    """Create a :class:`ServiceError` from an HTTP status code.

    Args:
        status_code (int): The HTTP status code.
        message (str): The exception message.
        kwargs: Additional arguments passed to the :class:`ServiceError`
            constructor.

    Returns:
        ServiceError: An instance of the appropriate subclass of
            :class:`ServiceError`.
    """
    error_class = exception_class_for_http_status(status_code)
    error = error_class(message, **kwargs)

    if error.code is None:
        error.code = status_code

    return error


def from_http_response(response, request=None, error=None):
    """Create a :class:`ServiceError` from an HTTP response.

    Args:
        response (pipeline_client.transports.base.HttpResponse): The HTTP
            response.
        request (Optional[pipeline_client.transports.base.HttpRequest]): The
            request that produced ``response``; used in the message.
        error (Optional[pipeline_client.models.CloudError]): The already
            deserialized error envelope. When omitted, the message is taken
            from the raw body.

    Returns:
        ServiceError: An instance of the appropriate subclass of
            :class:`ServiceError`, with the message and error populated
            from the response.
    """
    if error is not None and error.message:
        error_message = error.message
    else:
        error_message = _raw_error_message(response)

    if request is not None:
        message = "{method} {url}: {error}".format(
            method=request.method, url=request.url, error=error_message
        )
    else:
        message = error_message

    return from_http_status(
        response.status_code, message, error=error, response=response
    )


def _raw_error_message(response):
    content = response.content or b""
    try:
        payload = json.loads(content.decode("utf-8"))
    except ValueError:
        text = content.decode("utf-8", errors="replace").strip()
        return text or response.reason or "unknown error"
    if isinstance(payload, dict):
        inner = payload.get("error")
        if isinstance(inner, dict) and inner.get("message"):
            return inner["message"]
        if payload.get("message"):
            return payload["message"]
    return response.reason or "unknown error"
