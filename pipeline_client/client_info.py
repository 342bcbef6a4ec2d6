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

"""Helpers for providing client information.

Client information is used to send information about the calling client,
such as the library and Python version, to the service.
"""

import platform

import requests

from pipeline_client import version as pipeline_client_version

_PY_VERSION = platform.python_version()
_REQUESTS_VERSION = requests.__version__
_CLIENT_VERSION = pipeline_client_version.__version__


class ClientInfo(object):
    """Client information used to generate a user-agent for API calls.

    This user-agent information is sent along with API calls to allow the
    service to gather metrics on which client versions are in use.

    Args:
        python_version (str): The Python interpreter version, for example,
            ``'3.12.1'``.
        requests_version (Optional[str]): The requests library version.
        client_library_version (Optional[str]): The version of this library.
        user_agent (Optional[str]): Prefix to the user agent header. This is
            used to supply information such as application name or partner
            tool. Recommended format: ``application-or-tool-ID/major.minor.version``.
    """

    def __init__(
        self,
        python_version=_PY_VERSION,
        requests_version=_REQUESTS_VERSION,
        client_library_version=_CLIENT_VERSION,
        user_agent=None,
    ):
        self.python_version = python_version
        self.requests_version = requests_version
        self.client_library_version = client_library_version
        self.user_agent = user_agent

    def to_user_agent(self):
        """Returns the user-agent string for this client info."""
        # Services parse these tokens by position; keep the order stable.
        ua = ""

        if self.user_agent is not None:
            ua += "{user_agent} "

        if self.client_library_version is not None:
            ua += "pipeline-client/{client_library_version} "

        ua += "gl-python/{python_version} "

        if self.requests_version is not None:
            ua += "requests/{requests_version} "

        return ua.format(**self.__dict__).strip()


DEFAULT_CLIENT_INFO = ClientInfo()
