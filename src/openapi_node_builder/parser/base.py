"""Data models for operations read out of an OpenAPI document.

The traversal driver converts each (path, method) entry into these models
before handing it to the visitors.
"""

from pydantic import BaseModel


class Tag(BaseModel):
    """A tag declared at the document root, or seen on an operation."""

    name: str
    description: str = ""


class OperationContext(BaseModel):
    """Where an operation lives in the document."""

    pattern: str  # /pets/{petId}
    method: str  # get / post / ...


class Operation(BaseModel):
    """A single OpenAPI operation with the raw pieces the builders need."""

    operation_id: str | None = None
    summary: str = ""
    description: str = ""
    tags: list[str] = []
    parameters: list[dict] = []  # raw parameter objects, refs resolved
    request_body: dict | None = None  # raw requestBody object
    deprecated: bool = False
