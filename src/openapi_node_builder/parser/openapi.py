"""OpenAPI document loading, reference resolution and traversal.

`walk_document` is the driver: it feeds declared tags and every operation,
in document order, to a set of visitors.
"""

import logging
from pathlib import Path

import yaml
from prance.util.resolver import RESOLVE_FILES, RESOLVE_INTERNAL, RefResolver

from .base import Operation, OperationContext, Tag

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

# Stand-in location for documents that did not come from a file
PLACEHOLDER_URL = "file:///__openapi_node_builder__.yaml"


class DocumentError(ValueError):
    """The input is not a usable OpenAPI document."""


def is_openapi_document(data) -> bool:
    return isinstance(data, dict) and ("openapi" in data or "swagger" in data)


def load_document(file_path: Path) -> dict:
    """Load an OpenAPI document from a YAML or JSON file."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentError(f"{file_path} is not valid YAML or JSON: {e}") from e

    if not is_openapi_document(doc):
        raise DocumentError(f"{file_path} is not an OpenAPI document")
    return doc


def resolve_refs(doc: dict, url: str | None = None) -> dict:
    """Return a copy of `doc` with its $refs inlined by prance.

    Recursive references are cut with an empty object. When some reference
    cannot be resolved, each operation is resolved on its own and the ones
    that still fail are kept unresolved, so only those operations suffer.
    """
    url = url or PLACEHOLDER_URL
    try:
        return _resolve(doc, url)
    except Exception as e:
        logger.warning("Failed to resolve document references, resolving per operation: %s", e)

    resolved = {**doc, "paths": {}}
    for pattern, path_item in (doc.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            resolved["paths"][pattern] = path_item
            continue
        shared = {key: value for key, value in path_item.items() if key.lower() not in HTTP_METHODS}
        item = _resolve_or_keep(doc, url, pattern, shared)
        for method, raw_operation in path_item.items():
            if method.lower() in HTTP_METHODS:
                item[method] = _resolve_or_keep(doc, url, pattern, {method: raw_operation})[method]
        resolved["paths"][pattern] = item
    return resolved


def _resolve(doc: dict, url: str) -> dict:
    resolver = RefResolver(
        doc,
        url,
        resolve_types=RESOLVE_INTERNAL | RESOLVE_FILES,
        recursion_limit_handler=lambda *args: {},
    )
    resolver.resolve_references()
    return resolver.specs


def _resolve_or_keep(doc: dict, url: str, pattern: str, path_item: dict) -> dict:
    try:
        return _resolve({**doc, "paths": {pattern: path_item}}, url)["paths"][pattern]
    except Exception as e:
        logger.warning("Leaving references unresolved in %s %s: %s", pattern, ",".join(path_item), e)
        return dict(path_item)


class OpenAPIVisitor:
    """No-op base for objects handed to `walk_document`."""

    def visit_tag(self, tag: Tag) -> None:
        pass

    def visit_operation(self, operation: Operation, context: OperationContext) -> None:
        pass

    def visit_invalid_operation(self, raw: dict, context: OperationContext, error: Exception) -> None:
        """An operation that could not be read into an `Operation`."""
        pass


def walk_document(doc: dict, *visitors: OpenAPIVisitor) -> None:
    """Visit declared tags, then every operation, in document order."""
    for raw_tag in doc.get("tags") or []:
        if not isinstance(raw_tag, dict) or not raw_tag.get("name"):
            logger.warning("Ignoring tag without a name: %r", raw_tag)
            continue
        tag = Tag(name=raw_tag["name"], description=raw_tag.get("description") or "")
        for visitor in visitors:
            visitor.visit_tag(tag)

    paths = doc.get("paths") or {}
    if not isinstance(paths, dict):
        logger.warning("Ignoring paths of type %s", type(paths).__name__)
        return

    for pattern, path_item in paths.items():
        path_item = path_item or {}
        if not isinstance(path_item, dict):
            logger.warning("Ignoring path item %s of type %s", pattern, type(path_item).__name__)
            continue
        shared_parameters = path_item.get("parameters") or []
        for method, raw_operation in path_item.items():
            if method.lower() not in HTTP_METHODS:
                continue
            context = OperationContext(pattern=pattern, method=method.lower())
            try:
                operation = _build_operation(raw_operation or {}, shared_parameters)
            except Exception as e:
                for visitor in visitors:
                    visitor.visit_invalid_operation(raw_operation, context, e)
                continue
            for visitor in visitors:
                visitor.visit_operation(operation, context)


def _build_operation(raw: dict, shared_parameters: list[dict]) -> Operation:
    return Operation(
        operation_id=raw.get("operationId"),
        summary=raw.get("summary") or "",
        description=raw.get("description") or "",
        tags=raw.get("tags") or [],
        parameters=merge_parameters(shared_parameters, raw.get("parameters") or []),
        request_body=raw.get("requestBody"),
        deprecated=bool(raw.get("deprecated", False)),
    )


def merge_parameters(shared: list[dict], own: list[dict]) -> list[dict]:
    """Path-level parameters first, minus those an operation parameter with
    the same (name, in) overrides."""
    own_keys = {(p.get("name"), p.get("in")) for p in own}
    merged = [p for p in shared if (p.get("name"), p.get("in")) not in own_keys]
    return merged + list(own)
