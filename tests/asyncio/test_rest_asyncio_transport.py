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

import asyncio

import aiohttp
from google.auth import credentials as ga_credentials
import mock
import pytest

from pipeline_client import exceptions
from pipeline_client.transports import AsyncRestTransport, HttpRequest

URL = "https://ws.example.net/pipelines/etl?api-version=2019-06-01-preview"


def _make_session(status=200, content=b"{}", headers=None, reason="OK"):
    response = mock.MagicMock()
    response.status = status
    response.headers = headers or {}
    response.reason = reason
    response.read = mock.AsyncMock(return_value=content)

    session = mock.MagicMock()
    session.request.return_value.__aenter__.return_value = response
    session.close = mock.AsyncMock()
    return session


@pytest.mark.asyncio
async def test_send():
    session = _make_session(200, b'{"name": "etl"}', {"ETag": "0a"})
    transport = AsyncRestTransport(session=session)

    response = await transport.send(
        HttpRequest("GET", URL, headers={"Accept": "application/json"}), timeout=10
    )

    args, kwargs = session.request.call_args
    assert args == ("GET", URL)
    assert kwargs["headers"] == {"Accept": "application/json"}
    assert kwargs["data"] is None
    assert kwargs["timeout"] == aiohttp.ClientTimeout(total=10)
    assert response.status_code == 200
    assert response.content == b'{"name": "etl"}'
    assert response.headers["etag"] == "0a"


@pytest.mark.asyncio
async def test_send_without_timeout():
    session = _make_session()
    transport = AsyncRestTransport(session=session)

    await transport.send(HttpRequest("DELETE", URL))

    _, kwargs = session.request.call_args
    assert "timeout" not in kwargs


@pytest.mark.asyncio
async def test_send_applies_credentials():
    credentials = mock.Mock(spec=ga_credentials.Credentials)
    credentials.valid = True
    credentials.apply.side_effect = lambda headers: headers.update(
        {"authorization": "Bearer token"}
    )
    session = _make_session()
    transport = AsyncRestTransport(credentials, session=session)

    await transport.send(HttpRequest("GET", URL))

    _, kwargs = session.request.call_args
    assert kwargs["headers"]["authorization"] == "Bearer token"
    credentials.refresh.assert_not_called()


@pytest.mark.asyncio
async def test_send_refreshes_invalid_credentials():
    credentials = mock.Mock(spec=ga_credentials.Credentials)
    credentials.valid = False
    session = _make_session()
    transport = AsyncRestTransport(credentials, session=session)

    with mock.patch("google.auth.transport.requests.Request") as request_class:
        await transport.send(HttpRequest("GET", URL))

    credentials.refresh.assert_called_once_with(request_class.return_value)
    credentials.apply.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [aiohttp.ClientConnectionError("refused"), asyncio.TimeoutError()],
)
async def test_send_failure(error):
    session = _make_session()
    session.request.side_effect = error
    transport = AsyncRestTransport(session=session)

    with pytest.raises(exceptions.TransportError) as exc_info:
        await transport.send(HttpRequest("GET", URL))

    assert exc_info.value.cause is error


@pytest.mark.asyncio
async def test_close_provided_session_is_kept_open():
    session = _make_session()
    transport = AsyncRestTransport(session=session)

    await transport.close()

    session.close.assert_not_awaited()


@pytest.mark.asyncio
async def test_close_owned_session():
    session = _make_session()
    with mock.patch("aiohttp.ClientSession", return_value=session) as session_class:
        async with AsyncRestTransport() as transport:
            await transport.send(HttpRequest("GET", URL))

    session_class.assert_called_once_with()
    session.close.assert_awaited_once_with()
    assert transport._session is None


@pytest.mark.asyncio
async def test_close_before_first_request():
    transport = AsyncRestTransport()

    await transport.close()

    assert transport._session is None
