"""
Form body encoding for the Tracker v3 API.

Request bodies are flat fields or one level of grouped fields, e.g.
``{"story": {"name": "Login"}}`` which the API expects as ``story[name]=Login``.
"""

from typing import List, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

FormValue = Union[str, int, float, bool, None]
FormBody = Mapping[str, Union[FormValue, Mapping[str, FormValue]]]


def _scalar(value: FormValue) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def flatten_form(body: Optional[FormBody]) -> List[Tuple[str, str]]:
    """
    Flatten a (possibly grouped) form body into ordered key/value pairs.
    None values are dropped; deeper nesting raises ValueError.
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in (body or {}).items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            for field, inner in value.items():
                if inner is None:
                    continue
                if isinstance(inner, Mapping):
                    raise ValueError(
                        f"Form field {key}[{field}] nests too deep; "
                        "only one level of grouping is supported."
                    )
                pairs.append((f"{key}[{field}]", _scalar(inner)))
            continue
        pairs.append((key, _scalar(value)))
    return pairs


def encode_form(body: Optional[FormBody]) -> str:
    """
    Encode a form body as application/x-www-form-urlencoded.
    Example: encode_form({"story": {"labels": "bug,urgent"}})
    -> 'story%5Blabels%5D=bug%2Curgent'
    """
    return urlencode(flatten_form(body))


__all__ = ["FormBody", "FormValue", "flatten_form", "encode_form"]
