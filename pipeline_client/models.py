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

"""Resource types exchanged with the pipeline service.

Each type wraps the JSON object used on the wire. ``from_api_repr`` builds
an instance from a parsed response body and raises :class:`ValueError` when
the body lacks a required field; ``to_api_repr`` returns the object to send.
Fields the library does not know about are preserved on a round trip.
"""

import copy


class _ApiResource(object):
    """Base for types backed by a JSON object."""

    _REQUIRED_FIELDS = ()

    def __init__(self):
        self._properties = {}

    @classmethod
    def from_api_repr(cls, resource):
        """Factory: construct an instance from its API representation.

        Args:
            resource (Dict[str, Any]): The parsed JSON object.

        Returns:
            An instance of ``cls``.

        Raises:
            ValueError: If ``resource`` is not an object or lacks a
                required field.
        """
        if not isinstance(resource, dict):
            raise ValueError(
                "{} expects a JSON object, got {}".format(
                    cls.__name__, type(resource).__name__
                )
            )
        missing = [name for name in cls._REQUIRED_FIELDS if name not in resource]
        if missing:
            raise ValueError(
                "{} is missing required field(s): {}".format(
                    cls.__name__, ", ".join(missing)
                )
            )
        instance = cls.__new__(cls)
        instance._properties = copy.deepcopy(resource)
        return instance

    def to_api_repr(self):
        """Return the JSON-compatible object sent to the service."""
        return copy.deepcopy(self._properties)

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._properties == other._properties

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, self._properties)


class PipelineResource(_ApiResource):
    """A pipeline definition.

    Args:
        name (Optional[str]): The pipeline name. The service derives it from
            the request URL when creating, so it is informational.
        description (Optional[str]): The pipeline description.
        activities (Optional[List[dict]]): Activity definitions.
        parameters (Optional[Dict[str, dict]]): Parameter specifications,
            keyed by parameter name.
        variables (Optional[Dict[str, dict]]): Variable specifications.
        concurrency (Optional[int]): Maximum concurrent runs.
        annotations (Optional[List[Any]]): Free-form tags.
        folder (Optional[str]): The folder the pipeline lives in.
    """

    def __init__(
        self,
        name=None,
        description=None,
        activities=None,
        parameters=None,
        variables=None,
        concurrency=None,
        annotations=None,
        folder=None,
    ):
        self._properties = {"properties": {}}
        if name is not None:
            self._properties["name"] = name
        self.description = description
        self.activities = activities
        self.parameters = parameters
        self.variables = variables
        self.concurrency = concurrency
        self.annotations = annotations
        self.folder = folder

    def _get_sub(self, key):
        return (self._properties.get("properties") or {}).get(key)

    def _set_sub(self, key, value):
        sub = self._properties.get("properties")
        if sub is None:
            sub = self._properties["properties"] = {}
        if value is None:
            sub.pop(key, None)
        else:
            sub[key] = value

    @property
    def id(self):
        """Optional[str]: The fully qualified resource id (read-only)."""
        return self._properties.get("id")

    @property
    def name(self):
        """Optional[str]: The pipeline name."""
        return self._properties.get("name")

    @property
    def type(self):
        """Optional[str]: The resource type (read-only)."""
        return self._properties.get("type")

    @property
    def etag(self):
        """Optional[str]: The entity tag, usable with ``If-Match`` and
        ``If-None-Match`` (read-only)."""
        return self._properties.get("etag")

    @property
    def description(self):
        """Optional[str]: The pipeline description."""
        return self._get_sub("description")

    @description.setter
    def description(self, value):
        self._set_sub("description", value)

    @property
    def activities(self):
        """Optional[List[dict]]: The pipeline's activities."""
        return self._get_sub("activities")

    @activities.setter
    def activities(self, value):
        self._set_sub("activities", None if value is None else list(value))

    @property
    def parameters(self):
        """Optional[Dict[str, dict]]: Parameter specifications."""
        return self._get_sub("parameters")

    @parameters.setter
    def parameters(self, value):
        self._set_sub("parameters", None if value is None else dict(value))

    @property
    def variables(self):
        """Optional[Dict[str, dict]]: Variable specifications."""
        return self._get_sub("variables")

    @variables.setter
    def variables(self, value):
        self._set_sub("variables", None if value is None else dict(value))

    @property
    def concurrency(self):
        """Optional[int]: Maximum number of concurrent runs."""
        return self._get_sub("concurrency")

    @concurrency.setter
    def concurrency(self, value):
        self._set_sub("concurrency", value)

    @property
    def annotations(self):
        """Optional[List[Any]]: Free-form tags."""
        return self._get_sub("annotations")

    @annotations.setter
    def annotations(self, value):
        self._set_sub("annotations", None if value is None else list(value))

    @property
    def folder(self):
        """Optional[str]: The name of the folder holding the pipeline."""
        return (self._get_sub("folder") or {}).get("name")

    @folder.setter
    def folder(self, value):
        self._set_sub("folder", None if value is None else {"name": value})

    @property
    def provisioning_state(self):
        """Optional[str]: The provisioning state reported while a write is
        in flight."""
        return self._get_sub("provisioningState")


class PipelineListResponse(_ApiResource):
    """One page of the pipeline listing."""

    _REQUIRED_FIELDS = ("value",)

    _items = ()

    @classmethod
    def from_api_repr(cls, resource):
        instance = super(PipelineListResponse, cls).from_api_repr(resource)
        items = instance._properties["value"]
        if not isinstance(items, list):
            raise ValueError("PipelineListResponse.value must be a list")
        # Every item is checked here so a malformed page fails as a whole.
        instance._items = [PipelineResource.from_api_repr(item) for item in items]
        return instance

    @property
    def value(self):
        """List[PipelineResource]: The pipelines on this page."""
        return list(self._items)

    @property
    def next_link(self):
        """Optional[str]: The link to the next page, if any."""
        return self._properties.get("nextLink")


class CreateRunResponse(_ApiResource):
    """The response of triggering a pipeline run."""

    _REQUIRED_FIELDS = ("runId",)

    @property
    def run_id(self):
        """str: Identifier of the run that was started."""
        return self._properties["runId"]


class ArtifactRenameRequest(_ApiResource):
    """Request body for renaming an artifact.

    Args:
        new_name (str): The new name of the artifact.
    """

    def __init__(self, new_name):
        self._properties = {"newName": new_name}

    @property
    def new_name(self):
        """str: The new name of the artifact."""
        return self._properties.get("newName")


class CloudError(_ApiResource):
    """The error envelope returned with failed responses.

    The wire shape is ``{"error": {"code": ..., "message": ...}}``.

    Args:
        code (Optional[str]): The service error code.
        message (Optional[str]): A human readable message.
        target (Optional[str]): The element the error refers to.
        details (Optional[List[dict]]): Nested errors.
    """

    def __init__(self, code=None, message=None, target=None, details=None):
        error = {}
        for key, value in (
            ("code", code),
            ("message", message),
            ("target", target),
            ("details", details),
        ):
            if value is not None:
                error[key] = value
        self._properties = {"error": error}

    @classmethod
    def from_api_repr(cls, resource):
        instance = super(CloudError, cls).from_api_repr(resource)
        error = instance._properties.get("error")
        if not isinstance(error, dict):
            raise ValueError("CloudError expects an 'error' object")
        missing = [name for name in ("code", "message") if name not in error]
        if missing:
            raise ValueError(
                "CloudError is missing required field(s): {}".format(
                    ", ".join(missing)
                )
            )
        return instance

    @property
    def _error(self):
        return self._properties.get("error", {})

    @property
    def code(self):
        """Optional[str]: The service error code."""
        return self._error.get("code")

    @property
    def message(self):
        """Optional[str]: The error message."""
        return self._error.get("message")

    @property
    def target(self):
        """Optional[str]: The element the error refers to."""
        return self._error.get("target")

    @property
    def details(self):
        """List[CloudError]: Nested errors."""
        return [
            CloudError(
                code=item.get("code"),
                message=item.get("message"),
                target=item.get("target"),
            )
            for item in self._error.get("details") or ()
            if isinstance(item, dict)
        ]


class NotModified(object):
    """Result of a conditional read whose resource has not changed.

    Returned instead of the resource when the service answers
    ``304 Not Modified`` to a request carrying ``If-None-Match``.

    Args:
        etag (Optional[str]): The entity tag reported by the service, if any.
        headers (Optional[Mapping[str, str]]): The response headers.
    """

    status_code = 304

    def __init__(self, etag=None, headers=None):
        self.etag = etag
        self.headers = headers or {}

    def __eq__(self, other):
        if not isinstance(other, NotModified):
            return NotImplemented
        return self.etag == other.etag

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return "NotModified(etag={!r})".format(self.etag)
