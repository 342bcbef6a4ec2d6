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

"""Expand and inspect URL path templates.

Templates use named placeholders in braces::

    >>> expand('{endpoint}/pipelines/{pipelineName}',
    ...        endpoint='https://ws.example.net', pipelineName='etl')
    'https://ws.example.net/pipelines/etl'

Values are substituted verbatim; callers are responsible for percent-encoding
any value that must not introduce path separators.
"""

import functools
import re

_VARIABLE_RE = re.compile(r"\{([A-Za-z_$][A-Za-z0-9_$]*)\}")


def _expand_variable_match(named_vars, match):
    """Expand a matched variable with its value.

    Args:
        named_vars (dict): A dictionary of named variables.
        match (re.Match): A regular expression match.

    Returns:
        str: The expanded variable to replace the match.

    Raises:
        ValueError: If a named variable is required and not specified.
    """
    name = match.group(1)
    value = named_vars.get(name)
    if value is None:
        raise ValueError(
            "Named variable '{}' not specified and needed by template "
            "`{}` at position {}".format(name, match.string, match.start())
        )
    return str(value)


def expand(tmpl, **kwargs):
    """Expand a path template with the given variables.

    .. code-block:: python

        >>> expand('pipelines/{name}', name='etl')
        'pipelines/etl'

    Args:
        tmpl (str): The path template.
        kwargs: The named variables for the template.

    Returns:
        str: The expanded path

    Raises:
        ValueError: If a named variable is required and not specified.
    """
    replace = functools.partial(_expand_variable_match, kwargs)
    return _VARIABLE_RE.sub(replace, tmpl)


def variables(tmpl):
    """Return the placeholder names used by ``tmpl``, in order.

    Args:
        tmpl (str): The path template.

    Returns:
        List[str]: The variable names.
    """
    return [match.group(1) for match in _VARIABLE_RE.finditer(tmpl)]
