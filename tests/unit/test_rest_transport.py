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

import google.auth.exceptions
from google.auth import credentials as ga_credentials
import mock
import pytest
import requests

from pipeline_client import exceptions
from pipeline_client.transports import HttpRequest, RestTransport

URL = "https://ws.example.net/pipelines/etl?api-version=2019-06-01-preview"


def _make_session(status_code=200, content=b"{}", headers=None, reason="OK"):
    session = mock.create_autospec(requests.Session, instance=True)
    response = mock.create_autospec(requests.Response, instance=True)
    response.status_code = status_code
    response.content = content
    response.headers = requests.structures.CaseInsensitiveDict(headers or {})
    response.reason = reason
    session.request.return_value = response
    return session


def test_constructor_defaults():
    transport = RestTransport()

    assert isinstance(transport.credentials, ga_credentials.AnonymousCredentials)
    assert transport._owns_session


def test_send():
    session = _make_session(
        201, b'{"name": "etl"}', {"ETag": "0a", "Content-Type": "application/json"}
    )
    transport = RestTransport(session=session)
    request = HttpRequest(
        "PUT", URL, headers={"Content-Type": "application/json"}, body=b"{}"
    )

    response = transport.send(request, timeout=30)

    session.request.assert_called_once_with(
        "PUT",
        URL,
        data=b"{}",
        headers={"Content-Type": "application/json"},
        timeout=30,
    )
    assert response.status_code == 201
    assert response.content == b'{"name": "etl"}'
    assert response.headers["etag"] == "0a"
    assert response.reason == "OK"


@pytest.mark.parametrize(
    "error",
    [
        requests.exceptions.ConnectionError("refused"),
        requests.exceptions.Timeout("slow"),
        google.auth.exceptions.TransportError("token endpoint down"),
    ],
)
def test_send_failure(error):
    session = _make_session()
    session.request.side_effect = error
    transport = RestTransport(session=session)

    with pytest.raises(exceptions.TransportError) as exc_info:
        transport.send(HttpRequest("GET", URL))

    assert exc_info.value.cause is error
    assert exc_info.value.__cause__ is error
    assert "GET" in str(exc_info.value)


def test_non_success_status_is_returned():
    session = _make_session(404, b'{"error": {"code": "NotFound"}}')
    transport = RestTransport(session=session)

    response = transport.send(HttpRequest("GET", URL))

    assert response.status_code == 404


def test_close_provided_session_is_kept_open():
    session = _make_session()
    transport = RestTransport(session=session)

    transport.close()

    session.close.assert_not_called()


def test_close_owned_session():
    with mock.patch(
        "pipeline_client.transports.rest.AuthorizedSession", autospec=True
    ) as session_class:
        with RestTransport() as transport:
            pass

    session_class.assert_called_once_with(transport.credentials, refresh_status_codes=())
    session_class.return_value.close.assert_called_once_with()


def test_credentials_get_refresh_status_codes():
    credentials = mock.Mock(spec=ga_credentials.Credentials)
    with mock.patch(
        "pipeline_client.transports.rest.AuthorizedSession", autospec=True
    ) as session_class:
        transport = RestTransport(credentials)

    assert transport.credentials is credentials
    _, kwargs = session_class.call_args
    assert kwargs["refresh_status_codes"]
