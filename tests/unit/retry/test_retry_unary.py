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

import datetime

import mock
import pytest

from pipeline_client import exceptions
from pipeline_client import retry
from pipeline_client.transports import HttpResponse


@mock.patch("time.sleep", autospec=True)
@mock.patch(
    "pipeline_client.datetime_helpers.utcnow",
    return_value=datetime.datetime.min,
    autospec=True,
)
def test_retry_target_success(utcnow, sleep):
    predicate = retry.if_exception_type(ValueError)
    call_count = [0]

    def target():
        call_count[0] += 1
        if call_count[0] < 3:
            raise ValueError()
        return 42

    result = retry.retry_target(target, predicate, range(10), None)

    assert result == 42
    assert call_count[0] == 3
    sleep.assert_has_calls([mock.call(0), mock.call(1)])


@mock.patch("time.sleep", autospec=True)
@mock.patch(
    "pipeline_client.datetime_helpers.utcnow",
    return_value=datetime.datetime.min,
    autospec=True,
)
def test_retry_target_w_on_error(utcnow, sleep):
    predicate = retry.if_exception_type(ValueError)
    call_count = {"target": 0}
    to_raise = ValueError()

    def target():
        call_count["target"] += 1
        if call_count["target"] < 3:
            raise to_raise
        return 42

    on_error = mock.Mock()

    result = retry.retry_target(target, predicate, range(10), None, on_error=on_error)

    assert result == 42
    assert call_count["target"] == 3

    on_error.assert_has_calls([mock.call(to_raise), mock.call(to_raise)])
    sleep.assert_has_calls([mock.call(0), mock.call(1)])


@mock.patch("time.sleep", autospec=True)
@mock.patch(
    "pipeline_client.datetime_helpers.utcnow",
    return_value=datetime.datetime.min,
    autospec=True,
)
def test_retry_target_non_retryable_error(utcnow, sleep):
    predicate = retry.if_exception_type(ValueError)
    exception = TypeError()
    target = mock.Mock(side_effect=exception)

    with pytest.raises(TypeError) as exc_info:
        retry.retry_target(target, predicate, range(10), None)

    assert exc_info.value == exception
    sleep.assert_not_called()


@mock.patch("time.sleep", autospec=True)
@mock.patch("pipeline_client.datetime_helpers.utcnow", autospec=True)
def test_retry_target_timeout_exceeded(utcnow, sleep):
    predicate = retry.if_exception_type(ValueError)
    exception = ValueError("meep")
    target = mock.Mock(side_effect=exception)
    # Setup the timeline so that the first call takes 5 seconds but the second
    # call takes 6, which puts the retry over the timeout.
    utcnow.side_effect = [
        # The first call to utcnow establishes the start of the timeline.
        datetime.datetime.min,
        datetime.datetime.min + datetime.timedelta(seconds=5),
        datetime.datetime.min + datetime.timedelta(seconds=11),
    ]

    with pytest.raises(exceptions.RetryError) as exc_info:
        retry.retry_target(target, predicate, range(10), timeout=10)

    assert exc_info.value.cause == exception
    assert exc_info.value.__cause__ is exception
    assert exc_info.match("Timeout of 10.0s exceeded")
    assert exc_info.match("last exception: meep")
    assert target.call_count == 2


@mock.patch("time.sleep", autospec=True)
@mock.patch(
    "pipeline_client.datetime_helpers.utcnow",
    return_value=datetime.datetime.min,
    autospec=True,
)
def test_retry_target_honours_retry_after(utcnow, sleep):
    response = HttpResponse(429, headers={"Retry-After": "5"})
    throttled = exceptions.TooManyRequests("slow down", response=response)
    target = mock.Mock(side_effect=[throttled, 42])

    result = retry.retry_target(target, retry.if_transient_error, [1], timeout=30)

    assert result == 42
    sleep.assert_called_once_with(5.0)


@mock.patch("time.sleep", autospec=True)
@mock.patch(
    "pipeline_client.datetime_helpers.utcnow",
    return_value=datetime.datetime.min,
    autospec=True,
)
def test_retry_target_retry_after_past_timeout(utcnow, sleep):
    response = HttpResponse(503, headers={"Retry-After": "60"})
    busy = exceptions.ServiceUnavailable("busy", response=response)
    target = mock.Mock(side_effect=busy)

    with pytest.raises(exceptions.RetryError) as exc_info:
        retry.retry_target(target, retry.if_transient_error, range(10), timeout=10)

    assert exc_info.value.cause is busy
    assert target.call_count == 1
    sleep.assert_not_called()


def test_retry_target_bad_sleep_generator():
    with pytest.raises(ValueError, match="Sleep generator"):
        retry.retry_target(mock.sentinel.target, mock.sentinel.predicate, [], None)


class TestRetry(object):
    def test___call___and_execute_success(self):
        retry_ = retry.Retry()
        target = mock.Mock(spec=["__call__"], return_value=42)
        # __name__ is needed by functools.partial.
        target.__name__ = "target"

        decorated = retry_(target)
        target.assert_not_called()

        result = decorated("meep")

        assert result == 42
        target.assert_called_once_with("meep")

    @mock.patch("random.uniform", autospec=True, side_effect=lambda m, n: n)
    @mock.patch("time.sleep", autospec=True)
    def test___call___and_execute_retry(self, sleep, uniform):
        on_error = mock.Mock(spec=["__call__"], side_effect=[None])
        retry_ = retry.Retry(predicate=retry.if_exception_type(ValueError))

        target = mock.Mock(spec=["__call__"], side_effect=[ValueError(), 42])
        # __name__ is needed by functools.partial.
        target.__name__ = "target"

        decorated = retry_(target, on_error=on_error)
        target.assert_not_called()

        result = decorated("meep")

        assert result == 42
        assert target.call_count == 2
        target.assert_has_calls([mock.call("meep"), mock.call("meep")])
        sleep.assert_called_once_with(retry_._initial)
        assert on_error.call_count == 1

    @mock.patch("random.uniform", autospec=True, side_effect=lambda m, n: n)
    @mock.patch("time.sleep", autospec=True)
    def test___call___constructor_on_error_wins(self, sleep, uniform):
        constructor_on_error = mock.Mock()
        call_on_error = mock.Mock()
        retry_ = retry.Retry(
            predicate=retry.if_exception_type(ValueError),
            on_error=constructor_on_error,
        )
        target = mock.Mock(spec=["__call__"], side_effect=[ValueError(), 42])
        target.__name__ = "target"

        assert retry_(target, on_error=call_on_error)() == 42

        constructor_on_error.assert_called_once()
        call_on_error.assert_not_called()

    @mock.patch("random.uniform", autospec=True, side_effect=lambda m, n: n)
    @mock.patch("time.sleep", autospec=True)
    def test___call___retries_transient_service_errors(self, sleep, uniform):
        retry_ = retry.Retry()
        target = mock.Mock(
            spec=["__call__"],
            side_effect=[
                exceptions.ServiceUnavailable("busy"),
                exceptions.TransportError("reset"),
                "ok",
            ],
        )
        target.__name__ = "target"

        assert retry_(target)() == "ok"
        assert target.call_count == 3

    @mock.patch("time.sleep", autospec=True)
    def test___call___does_not_retry_client_errors(self, sleep):
        retry_ = retry.Retry()
        target = mock.Mock(
            spec=["__call__"], side_effect=exceptions.NotFound("missing")
        )
        target.__name__ = "target"

        with pytest.raises(exceptions.NotFound):
            retry_(target)()

        sleep.assert_not_called()
