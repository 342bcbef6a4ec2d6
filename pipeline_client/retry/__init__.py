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

"""Retry implementation for client calls"""

from .retry_base import exponential_sleep_generator
from .retry_base import if_exception_type
from .retry_base import if_transient_error
from .retry_unary import Retry
from .retry_unary import retry_target
from .retry_unary_async import AsyncRetry
from .retry_unary_async import retry_target as retry_target_async

__all__ = (
    "exponential_sleep_generator",
    "if_exception_type",
    "if_transient_error",
    "Retry",
    "retry_target",
    "AsyncRetry",
    "retry_target_async",
)
