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

"""JSON wire codec for request and response bodies."""

import json

from pipeline_client import exceptions

JSON_CONTENT_TYPE = "application/json"


class Serializer(object):
    """Convert model values to wire bytes and back.

    A *mapper* is a model type exposing ``from_api_repr`` (and, for request
    bodies, instances exposing ``to_api_repr``). Plain ``dict`` and ``list``
    values are sent as-is.
    """

    def serialize(self, value):
        """Encode a request body.

        Args:
            value (Any): A model instance or JSON-compatible value.

        Returns:
            bytes: The UTF-8 encoded JSON document.
        """
        if hasattr(value, "to_api_repr"):
            value = value.to_api_repr()
        return json.dumps(value, separators=(",", ":")).encode("utf-8")

    def parse(self, content):
        """Decode a JSON body.

        Args:
            content (bytes): The raw body.

        Returns:
            Any: The decoded document, or ``None`` for an empty body.

        Raises:
            pipeline_client.exceptions.DeserializationError: If the body is
                not valid UTF-8 JSON.
        """
        if not content:
            return None
        try:
            return json.loads(content.decode("utf-8"))
        except ValueError as exc:
            raise exceptions.DeserializationError(
                "Response body is not valid JSON: {}".format(exc), content
            ) from exc

    def deserialize(self, mapper, content):
        """Decode a response body into ``mapper``.

        Args:
            mapper (type): The model type declared for the status code.
            content (bytes): The raw body.

        Returns:
            Any: An instance of ``mapper``, or ``None`` for an empty body.

        Raises:
            pipeline_client.exceptions.DeserializationError: If the body is
                not JSON or does not have the shape ``mapper`` expects.
        """
        document = self.parse(content)
        if document is None:
            return None
        return self.from_document(mapper, document, content)

    def from_document(self, mapper, document, content=None):
        """Build ``mapper`` from an already decoded JSON document."""
        try:
            return mapper.from_api_repr(document)
        except (KeyError, TypeError, ValueError) as exc:
            raise exceptions.DeserializationError(
                "Response body does not match {}: {}".format(mapper.__name__, exc),
                content,
            ) from exc
