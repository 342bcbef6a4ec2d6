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

import itertools
import re

import mock
import pytest

from pipeline_client import exceptions
from pipeline_client import retry
from pipeline_client.transports import HttpResponse


def test_if_exception_type():
    predicate = retry.if_exception_type(ValueError)

    assert predicate(ValueError())
    assert not predicate(TypeError())


def test_if_exception_type_multiple():
    predicate = retry.if_exception_type(ValueError, TypeError)

    assert predicate(ValueError())
    assert predicate(TypeError())
    assert not predicate(RuntimeError())


@pytest.mark.parametrize(
    "exc",
    [
        exceptions.InternalServerError(""),
        exceptions.TooManyRequests(""),
        exceptions.ServiceUnavailable(""),
        exceptions.TransportError("connection reset"),
    ],
)
def test_if_transient_error_retryable(exc):
    assert retry.if_transient_error(exc)


@pytest.mark.parametrize(
    "exc",
    [
        exceptions.BadRequest(""),
        exceptions.NotFound(""),
        exceptions.PreconditionFailed(""),
        exceptions.GatewayTimeout(""),
        ValueError(),
    ],
)
def test_if_transient_error_not_retryable(exc):
    assert not retry.if_transient_error(exc)


# Make uniform return half of its maximum, which will be the calculated
# sleep time.
@mock.patch("random.uniform", autospec=True, side_effect=lambda m, n: n)
def test_exponential_sleep_generator_base_2(uniform):
    gen = retry.exponential_sleep_generator(1, 60, multiplier=2)

    result = list(itertools.islice(gen, 8))
    assert result == [1, 2, 4, 8, 16, 32, 60, 60]


@mock.patch("random.uniform", autospec=True, side_effect=lambda m, n: n)
def test_exponential_sleep_generator_initial_above_maximum(uniform):
    gen = retry.exponential_sleep_generator(10, 5)

    assert list(itertools.islice(gen, 3)) == [5, 5, 5]


class Test_BaseRetry(object):
    def _make_one(self, *args, **kwargs):
        return retry.retry_base._BaseRetry(*args, **kwargs)

    def test_constructor_defaults(self):
        retry_ = self._make_one()
        assert retry_._predicate == retry.if_transient_error
        assert retry_._initial == 1
        assert retry_._maximum == 60
        assert retry_._multiplier == 2
        assert retry_._timeout == 120
        assert retry_._on_error is None
        assert retry_.timeout == 120

    def test_constructor_options(self):
        _some_function = mock.Mock()

        retry_ = self._make_one(
            predicate=mock.sentinel.predicate,
            initial=1,
            maximum=2,
            multiplier=3,
            timeout=4,
            on_error=_some_function,
        )
        assert retry_._predicate == mock.sentinel.predicate
        assert retry_._initial == 1
        assert retry_._maximum == 2
        assert retry_._multiplier == 3
        assert retry_._timeout == 4
        assert retry_._on_error is _some_function

    def test_call_not_implemented(self):
        with pytest.raises(NotImplementedError):
            self._make_one()(mock.Mock())

    def test_with_timeout(self):
        retry_ = self._make_one(
            predicate=mock.sentinel.predicate,
            initial=1,
            maximum=2,
            multiplier=3,
            timeout=4,
            on_error=mock.sentinel.on_error,
        )
        new_retry = retry_.with_timeout(42)
        assert retry_ is not new_retry
        assert new_retry._timeout == 42
        assert new_retry.timeout == 42

        # the rest of the attributes should remain the same
        assert new_retry._predicate is retry_._predicate
        assert new_retry._initial == retry_._initial
        assert new_retry._maximum == retry_._maximum
        assert new_retry._multiplier == retry_._multiplier
        assert new_retry._on_error is retry_._on_error

    def test_with_predicate(self):
        retry_ = self._make_one(
            predicate=mock.sentinel.predicate,
            initial=1,
            maximum=2,
            multiplier=3,
            timeout=4,
            on_error=mock.sentinel.on_error,
        )
        new_retry = retry_.with_predicate(mock.sentinel.predicate2)
        assert retry_ is not new_retry
        assert new_retry._predicate == mock.sentinel.predicate2

        # the rest of the attributes should remain the same
        assert new_retry._timeout == retry_._timeout
        assert new_retry._initial == retry_._initial
        assert new_retry._maximum == retry_._maximum
        assert new_retry._multiplier == retry_._multiplier
        assert new_retry._on_error is retry_._on_error

    def test_with_delay_noop(self):
        retry_ = self._make_one(initial=1, maximum=2, multiplier=3)
        new_retry = retry_.with_delay()
        assert retry_ is not new_retry
        assert new_retry._initial == retry_._initial
        assert new_retry._maximum == retry_._maximum
        assert new_retry._multiplier == retry_._multiplier

    @pytest.mark.parametrize(
        "originals,updated,expected",
        [
            [(1, 2, 3), (4, 5, 6), (4, 5, 6)],
            [(1, 2, 3), (4, None, None), (4, 2, 3)],
            [(1, 2, 3), (None, 5, None), (1, 5, 3)],
            [(1, 2, 3), (None, None, 6), (1, 2, 6)],
        ],
    )
    def test_with_delay(self, originals, updated, expected):
        retry_ = self._make_one(
            initial=originals[0], maximum=originals[1], multiplier=originals[2]
        )
        new_retry = retry_.with_delay(
            initial=updated[0], maximum=updated[1], multiplier=updated[2]
        )
        assert retry_ is not new_retry
        assert new_retry._initial == expected[0]
        assert new_retry._maximum == expected[1]
        assert new_retry._multiplier == expected[2]

    def test___str__(self):
        def if_exception_type(exc):
            return bool(exc)  # pragma: NO COVER

        # Explicitly set all attributes as changed Retry defaults should not
        # cause this test to start failing.
        retry_ = self._make_one(
            predicate=if_exception_type,
            initial=1.0,
            maximum=60.0,
            multiplier=2.0,
            timeout=120.0,
            on_error=None,
        )
        assert re.match(
            (
                r"<_BaseRetry predicate=<function.*?if_exception_type.*?>, "
                r"initial=1.0, maximum=60.0, multiplier=2.0, timeout=120.0, "
                r"on_error=None>"
            ),
            str(retry_),
        )


def test_build_timeout_error():
    cause = exceptions.ServiceUnavailable("busy")

    error = retry.retry_base.build_timeout_error(10, cause)

    assert isinstance(error, exceptions.RetryError)
    assert error.cause is cause
    assert str(error).startswith("Timeout of 10.0s exceeded")


def test_build_timeout_error_without_timeout():
    error = retry.retry_base.build_timeout_error(None, None)

    assert error.message == "Timeout exceeded while calling target function"


def _throttled(retry_after):
    response = HttpResponse(429, headers={"Retry-After": retry_after})
    return exceptions.TooManyRequests("slow down", response=response)


class TestServerRequestedDelay(object):
    def test_seconds(self):
        assert retry.retry_base.server_requested_delay(_throttled("7")) == 7.0

    def test_http_date_ignored(self):
        error = _throttled("Wed, 21 Oct 2026 07:28:00 GMT")
        assert retry.retry_base.server_requested_delay(error) is None

    def test_service_error_without_response(self):
        error = exceptions.ServiceUnavailable("busy")
        assert retry.retry_base.server_requested_delay(error) is None

    def test_other_errors(self):
        error = exceptions.TransportError("connection reset")
        assert retry.retry_base.server_requested_delay(error) is None


def test_next_delay_uses_longer_server_delay():
    assert retry.retry_base.next_delay(2.0, _throttled("7")) == 7.0


def test_next_delay_keeps_longer_back_off():
    assert retry.retry_base.next_delay(9.0, _throttled("7")) == 9.0
    assert retry.retry_base.next_delay(3.0, ValueError()) == 3.0
