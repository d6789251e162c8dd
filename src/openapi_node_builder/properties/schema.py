"""Convert OpenAPI parameters and request bodies into node properties."""

import json

from .models import NodeProperty, OptionValue
from .utils import start_case

VALUE_EXPRESSION = "={{ $value }}"
JSON_VALUE_EXPRESSION = "={{ JSON.parse($value) }}"


class BodySchemaError(ValueError):
    """The request body has no JSON object schema we can turn into fields."""


class SchemaToProperties:
    """Field deriver: raw parameter / body schema -> primitive NodeProperty list."""

    def from_schema(self, schema: dict) -> dict:
        """Return the `type`, `default` and (for enums) `options` for a schema."""
        schema = schema or {}
        if "$ref" in schema:
            raise ValueError(f"Unresolved reference {schema['$ref']}")

        if schema.get("enum"):
            values = schema["enum"]
            return {
                "type": "options",
                "default": schema.get("default", values[0]),
                "options": [OptionValue(name=start_case(str(v)) or str(v), value=v) for v in values],
            }

        schema_type = schema.get("type", "string")
        if schema_type == "boolean":
            result = {"type": "boolean", "default": False}
        elif schema_type in ("integer", "number"):
            result = {"type": "number", "default": 0}
        elif schema_type == "object":
            result = {"type": "json", "default": "{}"}
        elif schema_type == "array":
            result = {"type": "json", "default": "[]"}
        else:
            result = {"type": "string", "default": ""}

        if "default" in schema:
            default = schema["default"]
            result["default"] = json.dumps(default, indent=2) if result["type"] == "json" else default
        return result

    def from_parameter(self, parameter: dict) -> NodeProperty:
        name = parameter["name"]
        location = parameter.get("in", "query")
        required = location == "path" or bool(parameter.get("required", False))

        routing = None
        if location == "query":
            routing = {"request": {"qs": {name: VALUE_EXPRESSION}}}
        elif location == "header":
            routing = {"request": {"headers": {name: VALUE_EXPRESSION}}}

        return NodeProperty(
            display_name=start_case(name) or name,
            name=name,
            required=required,
            description=parameter.get("description") or None,
            routing=routing,
            **self.from_schema(parameter.get("schema") or {}),
        )

    def from_parameters(self, parameters: list[dict] | None) -> list[NodeProperty]:
        return [self.from_parameter(p) for p in parameters or []]

    def from_request_body(self, body: dict | None) -> list[NodeProperty]:
        """One field per top-level property of the JSON body schema.

        Raises BodySchemaError when the body has no JSON schema, or the schema
        is not an object with properties.
        """
        if body is None:
            return []

        content = body.get("content") or {}
        media = content.get("application/json")
        if not media or not media.get("schema"):
            raise BodySchemaError(
                f"No application/json schema in request body (content types: {list(content) or 'none'})"
            )

        schema = self._merge_all_of(media["schema"])
        properties = schema.get("properties")
        if schema.get("type", "object") != "object" or not properties:
            raise BodySchemaError(f"Request body schema of type {schema.get('type')!r} has no properties")

        required = set(schema.get("required") or [])
        fields = []
        for key, prop_schema in properties.items():
            derived = self.from_schema(prop_schema)
            expression = JSON_VALUE_EXPRESSION if derived["type"] == "json" else VALUE_EXPRESSION
            fields.append(
                NodeProperty(
                    display_name=start_case(key) or key,
                    name=key,
                    required=key in required,
                    description=(prop_schema or {}).get("description") or None,
                    routing={
                        "send": {
                            "type": "body",
                            "property": key,
                            "value": expression,
                        }
                    },
                    **derived,
                )
            )
        return fields

    def _merge_all_of(self, schema: dict) -> dict:
        if "$ref" in schema:
            raise BodySchemaError(f"Unresolved reference {schema['$ref']}")
        if "allOf" not in schema:
            return schema

        merged = {"type": "object", "properties": {}, "required": []}
        for part in schema["allOf"]:
            part = self._merge_all_of(part)
            merged["properties"].update(part.get("properties") or {})
            merged["required"].extend(part.get("required") or [])
        merged["properties"].update(schema.get("properties") or {})
        merged["required"].extend(schema.get("required") or [])
        return merged
