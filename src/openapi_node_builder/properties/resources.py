"""Collect the resource selector from document tags."""

import logging

from ..parser.base import Operation, OperationContext, Tag
from ..parser.openapi import OpenAPIVisitor
from .models import NodeProperty, OptionValue
from .naming import ResourceParser

logger = logging.getLogger(__name__)


class ResourcePropertiesCollector(OpenAPIVisitor):
    """Declared tags first, then tags only seen on operations."""

    def __init__(self, resource_parser: ResourceParser | None = None):
        self.resource_parser = resource_parser or ResourceParser()
        self._options: dict[str, OptionValue] = {}

    def visit_tag(self, tag: Tag) -> None:
        self._add(tag)

    def visit_operation(self, operation: Operation, context: OperationContext) -> None:
        for name in operation.tags:
            self._add(Tag(name=name))

    def _add(self, tag: Tag) -> None:
        parser = self.resource_parser
        try:
            value = parser.value(tag)
        except ValueError as e:
            logger.warning("Ignoring tag %r: %s", tag.name, e)
            return
        if value in self._options:
            return
        self._options[value] = OptionValue(
            name=parser.name(tag),
            value=value,
            description=parser.description(tag) or None,
        )

    @property
    def options(self) -> list[OptionValue]:
        return list(self._options.values())

    @property
    def resources(self) -> NodeProperty:
        return NodeProperty(
            display_name="Resource",
            name="resource",
            type="options",
            no_data_expression=True,
            options=self.options,
            default="",
        )
