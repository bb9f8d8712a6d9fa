from typing import Any, Dict, Mapping


def trim_value(value: Any) -> Any:
    """
    Strips surrounding whitespace from a string, or from each string in a
    list or tuple. Other values are returned unchanged.
    """
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, tuple)):
        trimmed = [item.strip() if isinstance(item, str) else item for item in value]
        return tuple(trimmed) if isinstance(value, tuple) else trimmed
    return value


def trim_values(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: trim_value(value) for key, value in values.items()}


def copy_containers(value: Any) -> Any:
    """
    Copies lists, tuples and dicts (recursively through those container
    types). Every other value is returned as is, so objects compared by
    identity and objects that cannot be copied pass through.
    """
    if isinstance(value, list):
        return [copy_containers(item) for item in value]
    if isinstance(value, tuple):
        return tuple(copy_containers(item) for item in value)
    if isinstance(value, dict):
        return {key: copy_containers(item) for key, item in value.items()}
    return value
