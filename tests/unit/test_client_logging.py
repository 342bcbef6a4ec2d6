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

import json
import logging

import mock

from pipeline_client import client_logging
from pipeline_client.client_logging import (
    setup_logging,
    initialize_logging,
    parse_logging_scopes,
    StructuredLogFormatter,
)

_BASE = "pipeline_client.client_logging._BASE_LOGGER_NAME"


def reset_logger(scope):
    logger = logging.getLogger(scope)
    logger.handlers = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def test_parse_logging_scopes():
    assert parse_logging_scopes(None) == []
    assert parse_logging_scopes("") == []
    assert parse_logging_scopes("pipeline_client") == ["pipeline_client"]
    assert parse_logging_scopes(" pipeline_client.lro ") == ["pipeline_client.lro"]
    assert parse_logging_scopes("pipeline_clientx") == []
    assert parse_logging_scopes("requests") == []


def test_setup_logging_w_no_scopes():
    with mock.patch(_BASE, "foo"):
        setup_logging()
        base_logger = logging.getLogger("foo")
        assert base_logger.handlers == []
        assert not base_logger.propagate
        assert base_logger.level == logging.NOTSET

    reset_logger("foo")


def test_setup_logging_w_base_scope():
    with mock.patch(_BASE, "foo"):
        setup_logging("foo")
        base_logger = logging.getLogger("foo")
        assert isinstance(base_logger.handlers[0], logging.StreamHandler)
        assert isinstance(base_logger.handlers[0].formatter, StructuredLogFormatter)
        assert not base_logger.propagate
        assert base_logger.level == logging.DEBUG

    reset_logger("foo")


def test_setup_logging_w_configured_scope():
    with mock.patch(_BASE, "foo"):
        base_logger = logging.getLogger("foo")
        base_logger.propagate = False
        setup_logging("foo")
        assert base_logger.handlers == []
        assert not base_logger.propagate
        assert base_logger.level == logging.NOTSET

    reset_logger("foo")


def test_setup_logging_w_module_scope():
    with mock.patch(_BASE, "foo"):
        setup_logging("foo.lro")

        base_logger = logging.getLogger("foo")
        assert base_logger.handlers == []
        assert not base_logger.propagate
        assert base_logger.level == logging.NOTSET

        module_logger = logging.getLogger("foo.lro")
        assert isinstance(module_logger.handlers[0], logging.StreamHandler)
        assert not module_logger.propagate
        assert module_logger.level == logging.DEBUG

    reset_logger("foo")
    reset_logger("foo.lro")


def test_setup_logging_w_incorrect_scope():
    with mock.patch(_BASE, "foo"):
        setup_logging("abc")

        base_logger = logging.getLogger("foo")
        assert base_logger.handlers == []
        assert not base_logger.propagate
        assert base_logger.level == logging.NOTSET

        # Scopes outside the library are ignored.
        logger = logging.getLogger("abc")
        assert logger.handlers == []
        assert logger.propagate
        assert logger.level == logging.NOTSET

    reset_logger("foo")
    reset_logger("abc")


def test_initialize_logging():
    with mock.patch("os.getenv", return_value="foo.dispatcher"):
        with mock.patch(_BASE, "foo"), mock.patch.object(
            client_logging, "_LOGGING_INITIALIZED", False
        ):
            initialize_logging()

            base_logger = logging.getLogger("foo")
            assert base_logger.handlers == []
            assert not base_logger.propagate
            assert base_logger.level == logging.NOTSET

            module_logger = logging.getLogger("foo.dispatcher")
            assert isinstance(module_logger.handlers[0], logging.StreamHandler)
            assert not module_logger.propagate
            assert module_logger.level == logging.DEBUG

            # A second call leaves user-set configuration alone.
            base_logger.propagate = True
            module_logger.propagate = True

            initialize_logging()

            assert base_logger.propagate
            assert module_logger.propagate

    reset_logger("foo")
    reset_logger("foo.dispatcher")


def test_initialize_logging_reads_scope_env():
    with mock.patch.object(
        client_logging, "_LOGGING_INITIALIZED", False
    ), mock.patch.object(client_logging, "setup_logging") as setup:
        with mock.patch.dict(
            "os.environ", {"PIPELINE_CLIENT_PYTHON_LOGGING_SCOPE": "pipeline_client.lro"}
        ):
            initialize_logging()

    setup.assert_called_once_with("pipeline_client.lro")


def test_structured_log_formatter():
    record = logging.LogRecord(
        name="pipeline_client.dispatcher",
        level=logging.DEBUG,
        msg="Sending request for %s",
        pathname="pipeline_client/dispatcher.py",
        lineno=25,
        args=("getPipeline",),
        exc_info=None,
    )

    # Extra fields:
    record.rpcName = "getPipeline"
    record.serviceName = "pipelines"
    record.httpRequest = {"method": "GET", "url": "https://ws.example.net/pipelines/etl"}
    record.unrelated = "dropped"

    formatted_msg = StructuredLogFormatter().format(record)
    parsed_msg = json.loads(formatted_msg)

    assert parsed_msg["name"] == "pipeline_client.dispatcher"
    assert parsed_msg["severity"] == "DEBUG"
    assert parsed_msg["message"] == "Sending request for getPipeline"
    assert parsed_msg["rpcName"] == "getPipeline"
    assert parsed_msg["serviceName"] == "pipelines"
    assert parsed_msg["httpRequest"]["method"] == "GET"
    assert "httpResponse" not in parsed_msg
    assert "unrelated" not in parsed_msg
    assert "timestamp" in parsed_msg


def test_structured_log_formatter_non_json_values():
    record = logging.LogRecord(
        name="pipeline_client.lro",
        level=logging.DEBUG,
        msg="done",
        pathname="pipeline_client/lro.py",
        lineno=1,
        args=None,
        exc_info=None,
    )
    record.httpResponse = {"status": 200, "headers": {"ETag": b"0a"}}

    parsed_msg = json.loads(StructuredLogFormatter().format(record))

    assert parsed_msg["httpResponse"]["headers"]["ETag"] == "b'0a'"
