"""Collect operation options and their input fields, grouped by resource.

`OperationsCollector` is driven by `walk_document`. Each operation becomes
one `OperationOption` under every resource it is tagged with, plus a copy of
its fields made visible only for that (resource, operation) pair.
"""

import logging

from ..logging import format_context
from ..parser.base import Operation, OperationContext, Tag
from ..parser.openapi import OpenAPIVisitor
from .models import DisplayOptions, NodeProperty, OperationOption
from .naming import OperationParser, ResourceParser
from .options import OptionsByResource
from .schema import SchemaToProperties
from .utils import replace_path_vars_to_parameter

logger = logging.getLogger(__name__)

NO_BODY_MESSAGE = "There's no body available for request, kindly use HTTP Request node to send body"


class NoOperationsError(RuntimeError):
    """Nothing in the document produced an operation."""


class OperationsCollector(OpenAPIVisitor):
    """Builds the per-resource operation selectors and the global field list.

    With `endpoint_notice` every operation's fields start with an info notice
    showing `METHOD /path`.
    """

    def __init__(
        self,
        operation_parser: OperationParser | None = None,
        resource_parser: ResourceParser | None = None,
        schema_parser: SchemaToProperties | None = None,
        logger: logging.Logger = logger,
        endpoint_notice: bool = False,
    ):
        self.operation_parser = operation_parser or OperationParser()
        self.resource_parser = resource_parser or ResourceParser()
        self.schema_parser = schema_parser or SchemaToProperties()
        self.logger = logger
        self.endpoint_notice = endpoint_notice
        self.options_by_resource = OptionsByResource()
        self.failures: list[dict] = []
        self._fields: list[NodeProperty] = []

    @property
    def operations(self) -> list[NodeProperty]:
        """One `operation` selector per resource."""
        if self.options_by_resource.size == 0:
            raise NoOperationsError("No operations found in OpenAPI document")

        return [
            NodeProperty(
                display_name="Operation",
                name="operation",
                type="options",
                no_data_expression=True,
                display_options=DisplayOptions(show={"resource": [resource]}),
                options=list(options),
                default="",
            )
            for resource, options in self.options_by_resource
        ]

    @property
    def fields(self) -> list[NodeProperty]:
        return list(self._fields)

    def visit_operation(self, operation: Operation, context: OperationContext) -> None:
        bindings = {
            "operation": {
                "pattern": context.pattern,
                "method": context.method,
                "operationId": operation.operation_id,
            }
        }
        try:
            self._visit_operation(operation, context, bindings)
        except Exception as e:
            data = {**bindings, "error": f"{e}"}
            self.failures.append(data)
            self.logger.warning(
                "Failed to parse operation %s", format_context(data), extra={"context": data}
            )

    def visit_invalid_operation(self, raw, context: OperationContext, error: Exception) -> None:
        operation_id = raw.get("operationId") if isinstance(raw, dict) else None
        data = {
            "operation": {"pattern": context.pattern, "method": context.method, "operationId": operation_id},
            "error": f"{error}",
        }
        self.failures.append(data)
        self.logger.warning("Failed to read operation %s", format_context(data), extra={"context": data})

    def _visit_operation(self, operation: Operation, context: OperationContext, bindings: dict) -> None:
        if self.operation_parser.should_skip(operation, context):
            self.logger.info("Skipping operation %s", format_context(bindings), extra={"context": bindings})
            return

        option, operation_fields = self.parse_operation(operation, context, bindings)
        if not operation.tags:
            raise ValueError("Operation has no tags to derive a resource from")
        resources = [self.resource_parser.value(Tag(name=tag)) for tag in operation.tags]

        for resource in resources:
            fields = [field.model_copy(deep=True) for field in operation_fields]
            self._add_display_options(fields, resource, option.value)
            self.options_by_resource.add(resource, option.model_copy(deep=True))
            self._fields.extend(fields)

    def parse_operation(
        self, operation: Operation, context: OperationContext, bindings: dict | None = None
    ) -> tuple[OperationOption, list[NodeProperty]]:
        parser = self.operation_parser
        option = OperationOption(
            name=parser.name(operation, context),
            value=parser.value(operation, context),
            action=parser.action(operation, context),
            description=parser.description(operation, context),
            routing={
                "request": {
                    "method": context.method.upper(),
                    "url": f"={replace_path_vars_to_parameter(context.pattern)}",
                }
            },
        )
        fields = self.parse_fields(operation, context, bindings or {})
        if self.endpoint_notice:
            fields.insert(0, endpoint_notice(context))
        return option, fields

    def parse_fields(self, operation: Operation, context: OperationContext, bindings: dict) -> list[NodeProperty]:
        """Parameters and body fields, with optional ones folded into collections.

        Order: required parameters, optional parameter collection, required
        body fields, optional body collection (or the no-body notice).
        """
        fields: list[NodeProperty] = []

        parameters = self.schema_parser.from_parameters(operation.parameters)
        fields.extend(
            _fold_optional(
                parameters,
                display_name="Additional Query Parameters",
                name="additionalQueryParameters",
                description="Optional query parameters that can be added",
            )
        )

        try:
            body_fields = self.schema_parser.from_request_body(operation.request_body)
        except Exception as e:
            data = {**bindings, "error": f"{e}"}
            self.logger.warning("Failed to parse request body %s", format_context(data), extra={"context": data})
            fields.append(no_body_notice(context))
            return fields

        fields.extend(
            _fold_optional(
                body_fields,
                display_name="Additional Body Fields",
                name="additionalBodyFields",
                description="Optional body fields that can be added",
            )
        )
        return fields

    def _add_display_options(self, fields: list[NodeProperty], resource: str, operation: str) -> None:
        for field in fields:
            field.display_options = DisplayOptions(show={"resource": [resource], "operation": [operation]})


def _fold_optional(fields: list[NodeProperty], display_name: str, name: str, description: str) -> list[NodeProperty]:
    required = [f for f in fields if f.required]
    optional = [f for f in fields if not f.required]
    if not optional:
        return required

    collection = NodeProperty(
        display_name=display_name,
        name=name,
        type="collection",
        placeholder="Add Field",
        default={},
        options=optional,
        description=description,
    )
    return [*required, collection]


def no_body_notice(context: OperationContext) -> NodeProperty:
    return NodeProperty(
        display_name=f"{context.method.upper()} {context.pattern}<br/><br/>{NO_BODY_MESSAGE}",
        name="operation",
        type="notice",
        default="",
    )


def endpoint_notice(context: OperationContext) -> NodeProperty:
    return NodeProperty(
        display_name=f"{context.method.upper()} {context.pattern}",
        name="operation",
        type="notice",
        type_options={"theme": "info"},
        default="",
    )
