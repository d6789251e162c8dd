"""Naming and skipping rules for operations and resources."""

import re

from ..parser.base import Operation, OperationContext, Tag
from .utils import start_case

_NON_IDENTIFIER = re.compile(r"[^a-zA-Z0-9_-]")


class OperationParser:
    """Decides whether an operation is emitted and how its option is labelled."""

    def __init__(self, skip_deprecated: bool = True):
        self.skip_deprecated = skip_deprecated

    def should_skip(self, operation: Operation, context: OperationContext) -> bool:
        return self.skip_deprecated and operation.deprecated

    def name(self, operation: Operation, context: OperationContext) -> str:
        if operation.operation_id:
            return start_case(operation.operation_id)
        return f"{context.method.upper()} {context.pattern}"

    def value(self, operation: Operation, context: OperationContext) -> str:
        if operation.operation_id:
            return start_case(operation.operation_id)
        return self.name(operation, context)

    def action(self, operation: Operation, context: OperationContext) -> str:
        return operation.summary or self.name(operation, context)

    def description(self, operation: Operation, context: OperationContext) -> str:
        return operation.description or operation.summary or ""


class ResourceParser:
    """Maps a tag onto the resource it represents."""

    def name(self, tag: Tag) -> str:
        return start_case(tag.name)

    def value(self, tag: Tag) -> str:
        value = start_case(_NON_IDENTIFIER.sub("", tag.name))
        if not value:
            raise ValueError(f"Tag {tag.name!r} yields an empty resource identifier")
        return value

    def description(self, tag: Tag) -> str:
        return tag.description
