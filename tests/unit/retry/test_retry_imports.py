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


def test_public_imports_retry():
    from pipeline_client import retry

    assert retry.Retry is retry.retry_unary.Retry
    assert retry.AsyncRetry is retry.retry_unary_async.AsyncRetry
    assert retry.retry_target is retry.retry_unary.retry_target
    assert retry.retry_target_async is retry.retry_unary_async.retry_target
    assert retry.if_transient_error is retry.retry_base.if_transient_error


def test_all_names_resolve():
    from pipeline_client import retry

    for name in retry.__all__:
        assert getattr(retry, name) is not None
