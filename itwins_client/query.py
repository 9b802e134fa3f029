"""Query string construction for iTwins API requests.

Each mapping is an ordered sequence of ``(argument key, query parameter)``
pairs.  The order of the pairs is the order in which fragments appear
in the resulting query string.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Tuple
from urllib.parse import quote

ParameterMapping = Sequence[Tuple[str, str]]

ITWINS_QUERY_PARAM_MAPPING: ParameterMapping = (
    ("subClass", "subClass"),
    ("includeInactive", "includeInactive"),
    ("top", "$top"),
    ("skip", "$skip"),
    ("status", "status"),
    ("type", "type"),
    ("search", "$search"),
    ("displayName", "displayName"),
    ("number", "number"),
    ("parentId", "parentId"),
    ("iTwinAccountId", "iTwinAccountId"),
)

ITWINS_GET_QUERY_PARAM_MAPPING: ParameterMapping = ITWINS_QUERY_PARAM_MAPPING + (
    ("filter", "$filter"),
    ("orderby", "$orderby"),
    ("select", "$select"),
)

ODATA_PARAM_MAPPING: ParameterMapping = (
    ("top", "$top"),
    ("skip", "$skip"),
    ("search", "$search"),
)

REPOSITORY_PARAM_MAPPING: ParameterMapping = (
    ("class", "class"),
    ("subClass", "subClass"),
)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return quote(str(value), safe="")


def build_query_params(
    mapping: ParameterMapping, query_arg: Optional[Mapping[str, Any]]
) -> list:
    """Return ``key=value`` fragments for every truthy argument in ``mapping``.

    Arguments that are missing, ``None``, ``0``, ``False`` or empty are
    skipped.  Keys not present in ``mapping`` are ignored.
    """
    if not query_arg:
        return []
    params = []
    for arg_key, param_name in mapping:
        value = query_arg.get(arg_key)
        if not value:
            continue
        params.append(f"{param_name}={_format_value(value)}")
    return params


def get_query_string(
    mapping: ParameterMapping,
    query_arg: Optional[Mapping[str, Any]],
    *,
    leading: str = "?",
) -> str:
    """Build a query string ready to append to a URL.

    Parameters
    ----------
    mapping : sequence of (str, str)
        Ordered argument key to query parameter name pairs.
    query_arg : mapping, optional
        The caller's query arguments.
    leading : str, optional
        Separator placed before the first fragment.  Use ``"&"`` when
        the target URL already carries a query.  Defaults to ``"?"``.

    Returns
    -------
    str
        ``""`` when no fragment applies, otherwise e.g.
        ``"?subClass=Asset&$top=10"``.

    Examples
    --------
    >>> get_query_string(ODATA_PARAM_MAPPING, {"search": "Building A", "top": 10})
    '?$top=10&$search=Building%20A'
    """
    params = build_query_params(mapping, query_arg)
    if not params:
        return ""
    return leading + "&".join(params)


def append_query_string(
    url: str, mapping: ParameterMapping, query_arg: Optional[Mapping[str, Any]]
) -> str:
    """Append the query for ``query_arg`` to ``url``, respecting an existing query."""
    leading = "&" if "?" in url else "?"
    return url + get_query_string(mapping, query_arg, leading=leading)
