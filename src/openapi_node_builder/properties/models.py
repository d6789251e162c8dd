"""Output-side models: node properties, operation options and visibility.

All models serialize with camelCase keys (`displayName`, `displayOptions`,
...) via `to_dict`, omitting unset optional keys.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class DisplayOptions(_CamelModel):
    """Visibility condition: show when every listed key has one of the values."""

    show: dict[str, list[str]]


class OptionValue(_CamelModel):
    """One choice of an `options` field."""

    name: str
    value: Any
    description: str | None = None


class OperationOption(_CamelModel):
    """The selectable entry for one operation inside its resource's selector."""

    name: str
    value: str
    action: str
    description: str = ""
    routing: dict


class NodeProperty(_CamelModel):
    """One input field descriptor."""

    display_name: str
    name: str
    type: str
    default: Any = ""
    required: bool | None = None
    description: str | None = None
    placeholder: str | None = None
    no_data_expression: bool | None = None
    # choices, nested collection fields, or operation options
    options: list[Any] | None = None
    type_options: dict | None = None
    display_options: DisplayOptions | None = None
    routing: dict | None = None
