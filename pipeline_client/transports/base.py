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

"""Transport interfaces and the request/response values they exchange."""

import abc
from typing import Mapping, Optional

from requests.structures import CaseInsensitiveDict


class HttpRequest(object):
    """A fully built HTTP request.

    Args:
        method (str): The HTTP method, e.g. ``GET``.
        url (str): The absolute request URL, including the query string.
        headers (Optional[Mapping[str, str]]): Request headers.
        body (Optional[bytes]): The serialized request body.
    """

    def __init__(self, method, url, headers=None, body=None):
        self.method = method
        self.url = url
        self.headers = CaseInsensitiveDict(headers or {})
        self.body = body

    def __repr__(self):
        return "<HttpRequest {} {}>".format(self.method, self.url)


class HttpResponse(object):
    """The status, headers and raw body of an HTTP response.

    Args:
        status_code (int): The HTTP status code.
        headers (Optional[Mapping[str, str]]): Response headers. Lookups are
            case-insensitive.
        content (bytes): The raw response body.
        reason (Optional[str]): The HTTP reason phrase.
    """

    def __init__(self, status_code, headers=None, content=b"", reason=None):
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers or {})
        self.content = content or b""
        self.reason = reason

    @property
    def text(self):
        """str: The body decoded as UTF-8."""
        return self.content.decode("utf-8", errors="replace")

    def __repr__(self):
        return "<HttpResponse [{}]>".format(self.status_code)


class Transport(abc.ABC):
    """Sends :class:`HttpRequest` objects and returns :class:`HttpResponse`.

    Implementations must raise
    :class:`~pipeline_client.exceptions.TransportError` for any failure that
    prevented a response from being received.
    """

    @abc.abstractmethod
    def send(
        self, request: HttpRequest, timeout: Optional[float] = None
    ) -> HttpResponse:
        raise NotImplementedError()

    def close(self) -> None:
        """Release any resources held by the transport."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


class AsyncTransport(abc.ABC):
    """AsyncIO counterpart of :class:`Transport`."""

    @abc.abstractmethod
    async def send(
        self, request: HttpRequest, timeout: Optional[float] = None
    ) -> HttpResponse:
        raise NotImplementedError()

    async def close(self) -> None:
        """Release any resources held by the transport."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        await self.close()


_REDACTED_HEADERS = frozenset(["authorization", "cookie", "set-cookie"])


def header_dict(headers: Mapping[str, str]) -> dict:
    """Copy ``headers`` into a plain dict for structured logging.

    Credential-bearing headers are replaced with ``"REDACTED"``.
    """
    return {
        key: "REDACTED" if key.lower() in _REDACTED_HEADERS else value
        for key, value in headers.items()
    }
