"""Shared pydantic plumbing for API records and HTML forms."""
import json
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel


def as_list(value: Any) -> list:
    """Coerce a backend list field: None -> [], JSON-encoded string -> list, scalar -> [scalar]."""
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        s = value.strip()
        if s.startswith("["):
            try:
                decoded = json.loads(s)
            except ValueError:
                decoded = None
            if isinstance(decoded, list):
                return decoded
        return [s]
    return [value]


def lines(value: Any) -> list[str]:
    """Textarea input (one item per line, or repeated fields) -> list of non-empty strings."""
    if value is None:
        return []
    chunks = value if isinstance(value, (list, tuple)) else [value]
    out = []
    for chunk in chunks:
        for line in str(chunk).splitlines():
            line = line.strip()
            if line:
                out.append(line)
    return out


class Record(BaseModel):
    """A payload mirrored from the REST API: camelCase on the wire, unknown keys ignored."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("id", mode="before", check_fields=False)
    @classmethod
    def id_as_str(cls, v: Any) -> str:
        # Backends hand out integer and string ids alike; routes treat them as opaque strings
        return "" if v is None else str(v)


class FormModel(BaseModel):
    """An HTML form bound to snake_case input names."""
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    @model_validator(mode="before")
    @classmethod
    def blank_means_default(cls, data: Any) -> Any:
        # Empty number inputs arrive as "" and must fall back to the field default
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if not (isinstance(v, str) and v.strip() == "")}
        return data
