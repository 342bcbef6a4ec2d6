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

"""Blocking transport built on :mod:`requests` and :mod:`google.auth`."""

from typing import Optional

import google.auth.exceptions
from google.auth import credentials as ga_credentials  # type: ignore
from google.auth import transport as google_auth_transport  # type: ignore
from google.auth.transport.requests import AuthorizedSession  # type: ignore
import requests

from pipeline_client import exceptions
from pipeline_client.transports.base import HttpRequest, HttpResponse, Transport


class RestTransport(Transport):
    """Send requests through an authorized :class:`requests.Session`.

    Args:
        credentials (Optional[google.auth.credentials.Credentials]): The
            credentials applied to every request. Anonymous credentials are
            used when omitted.
        session (Optional[requests.Session]): A preconfigured session. When
            given, ``credentials`` are expected to be handled by the session
            and the transport does not close it.
    """

    def __init__(
        self,
        credentials: Optional[ga_credentials.Credentials] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        if credentials is None:
            credentials = ga_credentials.AnonymousCredentials()
        self._credentials = credentials
        self._owns_session = session is None
        if session is None:
            refresh_status_codes = (
                ()
                if isinstance(credentials, ga_credentials.AnonymousCredentials)
                else google_auth_transport.DEFAULT_REFRESH_STATUS_CODES
            )
            session = AuthorizedSession(
                credentials, refresh_status_codes=refresh_status_codes
            )
        self._session = session

    @property
    def credentials(self):
        """google.auth.credentials.Credentials: The credentials in use."""
        return self._credentials

    def send(
        self, request: HttpRequest, timeout: Optional[float] = None
    ) -> HttpResponse:
        try:
            response = self._session.request(
                request.method,
                request.url,
                data=request.body,
                headers=dict(request.headers),
                timeout=timeout,
            )
        except (
            requests.exceptions.RequestException,
            google.auth.exceptions.TransportError,
        ) as exc:
            raise exceptions.TransportError(
                "{} {} failed".format(request.method, request.url), exc
            ) from exc

        return HttpResponse(
            response.status_code,
            headers=response.headers,
            content=response.content,
            reason=response.reason,
        )

    def close(self) -> None:
        if self._owns_session:
            self._session.close()
