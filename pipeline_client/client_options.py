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

"""Client options class.

Client options provide a consistent interface for user options to be defined
across clients.

You can pass a client options object to a client.

.. code-block:: python

    from pipeline_client import client_options
    from pipeline_client.pipelines import PipelineClient

    options = client_options.ClientOptions(
        api_endpoint="https://myworkspace.dev.azuresynapse.net"
    )
    client = PipelineClient(client_options=options)

You can also pass a mapping object.

.. code-block:: python

    client = PipelineClient(
        client_options={"api_endpoint": "https://myworkspace.dev.azuresynapse.net"}
    )

When no endpoint is configured in code, the ``PIPELINE_CLIENT_ENDPOINT``
environment variable is used.
"""

import os

import google.auth
from google.auth import credentials as ga_credentials  # type: ignore

from pipeline_client.exceptions import DuplicateCredentialArgs

ENDPOINT_ENV = "PIPELINE_CLIENT_ENDPOINT"
DEFAULT_API_VERSION = "2019-06-01-preview"


class ClientOptions(object):
    """Client Options used to set options on clients.

    Args:
        api_endpoint (Optional[str]): The workspace endpoint, for example
            ``https://myworkspace.dev.azuresynapse.net``.
        api_version (Optional[str]): Overrides the ``api-version`` query
            parameter sent with every request.
        credentials_file (Optional[str]): A path to a file storing
            credentials. ``credentials_file`` and ``credentials`` passed to
            the client are mutually exclusive.
        scopes (Optional[Sequence[str]]): OAuth access token override scopes,
            used together with ``credentials_file``.
    """

    def __init__(
        self,
        api_endpoint=None,
        api_version=None,
        credentials_file=None,
        scopes=None,
    ):
        self.api_endpoint = api_endpoint
        self.api_version = api_version
        self.credentials_file = credentials_file
        self.scopes = scopes

    def __repr__(self):
        return "ClientOptions: " + repr(self.__dict__)


def from_dict(options):
    """Construct a client options object from a mapping object.

    Args:
        options (collections.abc.Mapping): A mapping object with client options.
            See the docstring for ClientOptions for details on valid arguments.

    Returns:
        ClientOptions: The options.

    Raises:
        ValueError: If ``options`` has a key that is not a client option.
    """

    client_options = ClientOptions()

    for key, value in options.items():
        if hasattr(client_options, key):
            setattr(client_options, key, value)
        else:
            raise ValueError("ClientOptions does not accept an option '" + key + "'")

    return client_options


def resolve_endpoint(client_options=None, endpoint=None):
    """Return the endpoint a client should send requests to.

    The endpoint is taken from ``client_options.api_endpoint``, then from
    ``endpoint``, then from the ``PIPELINE_CLIENT_ENDPOINT`` environment
    variable. A trailing slash is removed.

    Raises:
        ValueError: If no endpoint is configured, or it is empty.
    """
    resolved = None
    if client_options is not None and client_options.api_endpoint is not None:
        resolved = client_options.api_endpoint
    elif endpoint is not None:
        resolved = endpoint
    else:
        resolved = os.getenv(ENDPOINT_ENV)

    if resolved is None or len(resolved.strip()) == 0:
        raise ValueError(
            "An endpoint is required. Pass `endpoint`, set "
            "`client_options.api_endpoint` or the {} environment "
            "variable.".format(ENDPOINT_ENV)
        )
    return resolved.strip().rstrip("/")


def resolve_credentials(client_options=None, credentials=None):
    """Return the credentials a client should use.

    Args:
        client_options (Optional[ClientOptions]): The client options.
        credentials (Optional[google.auth.credentials.Credentials]): Explicit
            credentials.

    Returns:
        google.auth.credentials.Credentials: ``credentials`` when given,
            otherwise credentials loaded from
            ``client_options.credentials_file``, otherwise anonymous
            credentials.

    Raises:
        pipeline_client.exceptions.DuplicateCredentialArgs: If both
            ``credentials`` and a credentials file are given.
    """
    credentials_file = None
    scopes = None
    if client_options is not None:
        credentials_file = client_options.credentials_file
        scopes = client_options.scopes

    if credentials is not None and credentials_file is not None:
        raise DuplicateCredentialArgs(
            "'credentials_file' and 'credentials' are mutually exclusive."
        )

    if credentials is not None:
        return credentials

    if credentials_file is not None:
        credentials, _ = google.auth.load_credentials_from_file(
            credentials_file, scopes=scopes
        )
        return credentials

    return ga_credentials.AnonymousCredentials()
