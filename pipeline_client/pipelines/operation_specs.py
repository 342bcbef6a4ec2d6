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

"""Operation specs of the pipeline service."""

from pipeline_client import models
from pipeline_client.operation_spec import DEFAULT_RESPONSE
from pipeline_client.operation_spec import OperationSpec
from pipeline_client.operation_spec import ResponseSpec
from pipeline_client.pipelines import parameters

_CLOUD_ERROR = ResponseSpec(models.CloudError)
_PIPELINE = ResponseSpec(models.PipelineResource)
_NO_BODY = ResponseSpec()

LIST_PIPELINES = OperationSpec(
    name="getPipelinesByWorkspace",
    path="/pipelines",
    http_method="GET",
    responses={
        200: ResponseSpec(models.PipelineListResponse),
        DEFAULT_RESPONSE: _CLOUD_ERROR,
    },
    url_parameters=(parameters.ENDPOINT,),
    query_parameters=(parameters.API_VERSION,),
    header_parameters=(parameters.ACCEPT,),
)

LIST_PIPELINES_NEXT = OperationSpec(
    name="getPipelinesByWorkspaceNext",
    path="{nextLink}",
    http_method="GET",
    responses={
        200: ResponseSpec(models.PipelineListResponse),
        DEFAULT_RESPONSE: _CLOUD_ERROR,
    },
    url_parameters=(parameters.ENDPOINT, parameters.NEXT_LINK),
    query_parameters=(parameters.API_VERSION,),
    header_parameters=(parameters.ACCEPT,),
)

CREATE_OR_UPDATE_PIPELINE = OperationSpec(
    name="createOrUpdatePipeline",
    path="/pipelines/{pipelineName}",
    http_method="PUT",
    responses={
        200: _PIPELINE,
        201: _PIPELINE,
        202: _PIPELINE,
        204: _PIPELINE,
        DEFAULT_RESPONSE: _CLOUD_ERROR,
    },
    url_parameters=(parameters.ENDPOINT, parameters.PIPELINE_NAME),
    query_parameters=(parameters.API_VERSION,),
    header_parameters=(parameters.ACCEPT, parameters.IF_MATCH),
    request_body=parameters.PIPELINE,
    media_type="json",
)

GET_PIPELINE = OperationSpec(
    name="getPipeline",
    path="/pipelines/{pipelineName}",
    http_method="GET",
    responses={
        200: _PIPELINE,
        304: _NO_BODY,
        DEFAULT_RESPONSE: _CLOUD_ERROR,
    },
    url_parameters=(parameters.ENDPOINT, parameters.PIPELINE_NAME),
    query_parameters=(parameters.API_VERSION,),
    header_parameters=(parameters.ACCEPT, parameters.IF_NONE_MATCH),
)

DELETE_PIPELINE = OperationSpec(
    name="deletePipeline",
    path="/pipelines/{pipelineName}",
    http_method="DELETE",
    responses={
        200: _NO_BODY,
        201: _NO_BODY,
        202: _NO_BODY,
        204: _NO_BODY,
        DEFAULT_RESPONSE: _CLOUD_ERROR,
    },
    url_parameters=(parameters.ENDPOINT, parameters.PIPELINE_NAME),
    query_parameters=(parameters.API_VERSION,),
    header_parameters=(parameters.ACCEPT,),
)

RENAME_PIPELINE = OperationSpec(
    name="renamePipeline",
    path="/pipelines/{pipelineName}/rename",
    http_method="POST",
    responses={
        200: _NO_BODY,
        201: _NO_BODY,
        202: _NO_BODY,
        204: _NO_BODY,
        DEFAULT_RESPONSE: _CLOUD_ERROR,
    },
    url_parameters=(parameters.ENDPOINT, parameters.PIPELINE_NAME),
    query_parameters=(parameters.API_VERSION,),
    header_parameters=(parameters.ACCEPT,),
    request_body=parameters.RENAME_REQUEST,
    media_type="json",
)

CREATE_PIPELINE_RUN = OperationSpec(
    name="createPipelineRun",
    path="/pipelines/{pipelineName}/createRun",
    http_method="POST",
    responses={
        202: ResponseSpec(models.CreateRunResponse),
        DEFAULT_RESPONSE: _CLOUD_ERROR,
    },
    url_parameters=(parameters.ENDPOINT, parameters.PIPELINE_NAME),
    query_parameters=(
        parameters.API_VERSION,
        parameters.REFERENCE_PIPELINE_RUN_ID,
        parameters.IS_RECOVERY,
        parameters.START_ACTIVITY_NAME,
    ),
    header_parameters=(parameters.ACCEPT,),
    request_body=parameters.RUN_PARAMETERS,
    media_type="json",
)
