"""End-to-end pipeline: OpenAPI document -> node property list."""

import copy
import logging

from .config import BuilderConfig, Override
from .parser.openapi import resolve_refs, walk_document
from .properties.collector import OperationsCollector
from .properties.models import NodeProperty
from .properties.naming import OperationParser, ResourceParser
from .properties.resources import ResourcePropertiesCollector

logger = logging.getLogger(__name__)


class PropertiesBuilder:
    """Runs the resource and operation collectors over one document."""

    def __init__(
        self,
        doc: dict,
        config: BuilderConfig | None = None,
        logger: logging.Logger = logger,
        url: str | None = None,
    ):
        self.doc = resolve_refs(doc, url)
        self.config = config or BuilderConfig()
        resource_parser = ResourceParser()
        self.resources = ResourcePropertiesCollector(resource_parser)
        self.collector = OperationsCollector(
            operation_parser=OperationParser(skip_deprecated=self.config.skip_deprecated),
            resource_parser=resource_parser,
            logger=logger,
            endpoint_notice=self.config.endpoint_notice,
        )
        self._walked = False

    @property
    def failures(self) -> list[dict]:
        return list(self.collector.failures)

    def build(self) -> list[NodeProperty]:
        """Resource selector, operation selectors, then every operation field.

        Raises NoOperationsError when the document yields no operation.
        """
        if not self._walked:
            walk_document(self.doc, self.resources, self.collector)
            self._walked = True
        return [self.resources.resources, *self.collector.operations, *self.collector.fields]

    def to_dicts(self) -> list[dict]:
        properties = [prop.to_dict() for prop in self.build()]
        return apply_overrides(properties, self.config.overrides)


def apply_overrides(properties: list[dict], overrides: list[Override]) -> list[dict]:
    for override in overrides:
        for prop in properties:
            if all(prop.get(key) == value for key, value in override.find.items()):
                prop.update(copy.deepcopy(override.replace))
    return properties
