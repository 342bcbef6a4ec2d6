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

"""Parameters shared by the pipeline operations."""

from pipeline_client import client_options
from pipeline_client import models
from pipeline_client.operation_spec import Parameter, ParameterLocation
from pipeline_client.serializer import JSON_CONTENT_TYPE

ENDPOINT = Parameter(
    "endpoint", ParameterLocation.URL, required=True, skip_encoding=True
)
PIPELINE_NAME = Parameter(
    "pipelineName", ParameterLocation.URL, required=True
)
NEXT_LINK = Parameter(
    "nextLink", ParameterLocation.URL, required=True, skip_encoding=True
)

API_VERSION = Parameter(
    "apiVersion",
    ParameterLocation.QUERY,
    serialized_name="api-version",
    required=True,
    constant=client_options.DEFAULT_API_VERSION,
)
REFERENCE_PIPELINE_RUN_ID = Parameter(
    "referencePipelineRunId", ParameterLocation.QUERY
)
IS_RECOVERY = Parameter("isRecovery", ParameterLocation.QUERY)
START_ACTIVITY_NAME = Parameter("startActivityName", ParameterLocation.QUERY)

ACCEPT = Parameter(
    "accept",
    ParameterLocation.HEADER,
    serialized_name="Accept",
    constant=JSON_CONTENT_TYPE,
)
IF_MATCH = Parameter("ifMatch", ParameterLocation.HEADER, serialized_name="If-Match")
IF_NONE_MATCH = Parameter(
    "ifNoneMatch", ParameterLocation.HEADER, serialized_name="If-None-Match"
)

PIPELINE = Parameter(
    "pipeline",
    ParameterLocation.BODY,
    required=True,
    mapper=models.PipelineResource,
)
RENAME_REQUEST = Parameter(
    "request",
    ParameterLocation.BODY,
    required=True,
    mapper=models.ArtifactRenameRequest,
)
# Run parameters are a free-form object keyed by pipeline parameter name.
RUN_PARAMETERS = Parameter("parameters", ParameterLocation.BODY)
