"""Extensible attribute conversion between Python mappings and WAPI JSON.

WAPI carries extensible attributes as ``{"Name": {"value": <value>}}``. Inside
the client an EA set is a plain ``dict[str, Any]``; conversion happens only
when a payload is built or a response is parsed.
"""

from typing import Any


def _value_to_wapi(value: Any) -> Any:
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, list | tuple):
        return [_value_to_wapi(item) for item in value]
    return value


def _value_from_wapi(value: Any) -> Any:
    if isinstance(value, list):
        return [_value_from_wapi(item) for item in value]
    if value in ("True", "False"):
        return value == "True"
    return value


def is_wapi_ea(data: Any) -> bool:
    """Return True if data already has the ``{"Name": {"value": ...}}`` shape."""
    return (
        isinstance(data, dict)
        and bool(data)
        and all(isinstance(v, dict) and "value" in v for v in data.values())
    )


def ea_to_wapi(ea: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """
    Convert an EA mapping to WAPI ``extattrs`` format.

    Attributes with empty values (None, "" or []) are dropped.
    """
    return {
        name: {"value": _value_to_wapi(value)}
        for name, value in ea.items()
        if not (value is None or value == "" or value == [])
    }


def ea_from_wapi(extattrs: dict[str, Any] | None) -> dict[str, Any]:
    """
    Convert WAPI ``extattrs`` into a plain mapping.

    Only the exact strings "True" and "False" become bools; any other spelling
    is kept as text so it is written back unchanged.
    """
    if not extattrs:
        return {}
    return {name: _value_from_wapi(entry["value"]) for name, entry in extattrs.items()}


def ea_search_params(ea: dict[str, Any] | None) -> dict[str, str]:
    """
    Build WAPI EA search parameters.

    Example:
        {"Tenant ID": "t1"} -> {"*Tenant ID": "t1"}
    """
    if not ea:
        return {}
    return {f"*{name}": str(_value_to_wapi(value)) for name, value in ea.items()}
