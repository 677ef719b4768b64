from typing import Any


def as_str(value: Any) -> Any:
    """Text value of a YAML scalar.

    YAML reads bare `4`, `1234` or `false` as numbers and booleans; in a
    pipeline config they are always meant as text. Other shapes are passed
    through so validation still rejects them.
    """
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    return value


def as_str_list(values: Any) -> Any:
    if isinstance(values, (list, tuple)):
        return [as_str(v) for v in values]
    return as_str(values)
