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

"""AsyncIO transport built on :mod:`aiohttp`."""

import asyncio
from typing import Optional

import aiohttp
import google.auth.exceptions
from google.auth import credentials as ga_credentials  # type: ignore
from google.auth.transport import requests as google_auth_requests  # type: ignore

from pipeline_client import exceptions
from pipeline_client.transports.base import AsyncTransport, HttpRequest, HttpResponse


class AsyncRestTransport(AsyncTransport):
    """Send requests through an :class:`aiohttp.ClientSession`.

    Credentials are applied to each request's headers. When they need a
    refresh, the blocking refresh runs in the default executor so the event
    loop is never blocked.

    Args:
        credentials (Optional[google.auth.credentials.Credentials]): The
            credentials applied to every request. Anonymous credentials are
            used when omitted.
        session (Optional[aiohttp.ClientSession]): A preconfigured session.
            The transport creates (and later closes) its own when omitted.
    """

    def __init__(
        self,
        credentials: Optional[ga_credentials.Credentials] = None,
        *,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        if credentials is None:
            credentials = ga_credentials.AnonymousCredentials()
        self._credentials = credentials
        self._session = session
        self._owns_session = session is None
        self._auth_request = None

    @property
    def credentials(self):
        """google.auth.credentials.Credentials: The credentials in use."""
        return self._credentials

    def _get_session(self):
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def _apply_credentials(self, headers):
        if not self._credentials.valid:
            if self._auth_request is None:
                self._auth_request = google_auth_requests.Request()
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(
                None, self._credentials.refresh, self._auth_request
            )
        self._credentials.apply(headers)

    async def send(
        self, request: HttpRequest, timeout: Optional[float] = None
    ) -> HttpResponse:
        headers = dict(request.headers)
        kwargs = {}
        if timeout is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)

        try:
            await self._apply_credentials(headers)
            session = self._get_session()
            async with session.request(
                request.method,
                request.url,
                headers=headers,
                data=request.body,
                **kwargs,
            ) as response:
                content = await response.read()
        except (
            aiohttp.ClientError,
            asyncio.TimeoutError,
            google.auth.exceptions.TransportError,
        ) as exc:
            raise exceptions.TransportError(
                "{} {} failed".format(request.method, request.url), exc
            ) from exc

        return HttpResponse(
            response.status,
            headers=response.headers,
            content=content,
            reason=response.reason,
        )

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
