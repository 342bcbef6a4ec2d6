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

import pytest

from pipeline_client import path_template


@pytest.mark.parametrize(
    "tmpl, kwargs, expected_result",
    [
        ["/pipelines/{pipelineName}", dict(pipelineName="etl"), "/pipelines/etl"],
        [
            "{endpoint}/pipelines/{pipelineName}/rename",
            dict(endpoint="https://ws.example.net", pipelineName="etl"),
            "https://ws.example.net/pipelines/etl/rename",
        ],
        ["{nextLink}", dict(nextLink="https://h/p?a=b"), "https://h/p?a=b"],
        ["/pipelines", dict(), "/pipelines"],
        ["/pipelines/{pipelineName}", dict(pipelineName=5), "/pipelines/5"],
    ],
)
def test_expand_success(tmpl, kwargs, expected_result):
    result = path_template.expand(tmpl, **kwargs)
    assert result == expected_result


@pytest.mark.parametrize(
    "tmpl, kwargs, exc_match",
    [
        ["/pipelines/{pipelineName}", dict(), "pipelineName"],
        ["{endpoint}/pipelines", dict(endpoint=None), "endpoint"],
    ],
)
def test_expand_failure(tmpl, kwargs, exc_match):
    with pytest.raises(ValueError, match=exc_match):
        path_template.expand(tmpl, **kwargs)


def test_variables():
    assert path_template.variables("{endpoint}/pipelines/{pipelineName}") == [
        "endpoint",
        "pipelineName",
    ]
    assert path_template.variables("/pipelines") == []
