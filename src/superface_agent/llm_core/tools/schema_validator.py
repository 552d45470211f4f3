from typing import Any, Dict, Set

import jsonref  # type: ignore

from ..exceptions import ToolValidationError
from ..logger import get_logger

logger = get_logger(__name__)


class SchemaValidator:
    """
    Helper class for validating and sanitizing the JSON schemas the hub publishes for its tools.
    """

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Checks if the schema contains recursive references by traversing the graph.

        Args:
            schema: The JSON schema to check.

        Raises:
            ToolValidationError: If a recursive reference is found.
        """
        defs = schema.get("$defs", {}) or schema.get("definitions", {})

        def check(node: Any, path: Set[str]) -> None:
            if isinstance(node, dict):
                if "$ref" in node:
                    ref = node["$ref"]
                    if ref in path:
                        msg = (
                            f"Recursive structure detected: {ref}. "
                            "Recursive structures are not allowed in tool inputs."
                        )
                        logger.error(msg)
                        raise ToolValidationError(msg)

                    # e.g. #/$defs/City
                    if ref.startswith("#"):
                        parts = ref.split("/")
                        if len(parts) >= 3:
                            def_name = parts[-1]
                            if def_name in defs:
                                check(defs[def_name], path | {ref})
                    return

                for v in node.values():
                    check(v, path)
            elif isinstance(node, list):
                for item in node:
                    check(item, path)

        check(schema, set())

    @staticmethod
    def resolve_refs(schema: Any) -> Any:
        """Inline local ``$ref`` pointers so providers receive a self-contained schema.

        Args:
            schema: The JSON schema to resolve.

        Returns:
            A plain dict with references replaced.
        """
        if not isinstance(schema, dict):
            return schema
        SchemaValidator.assert_no_recursive_refs(schema)
        # proxies=False ensures we get a plain dict back, not JsonRef objects
        return jsonref.replace_refs(schema, proxies=False)

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Cleans up the schema for better compatibility with LLM providers.
        Removes $defs, $schema, $id, title.
        Simplifies Optional fields (anyOf with null).

        Args:
            schema: The JSON schema to sanitize.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        new_schema = schema.copy()

        for key in ["$defs", "$schema", "$id", "title", "definitions"]:
            new_schema.pop(key, None)

        # Optional[X] arrives as anyOf [X, null]
        if "anyOf" in new_schema:
            any_of = new_schema["anyOf"]
            non_null = [x for x in any_of if not (isinstance(x, dict) and x.get("type") == "null")]

            if len(non_null) == 1 and isinstance(non_null[0], dict):
                merged = non_null[0].copy()
                if "description" in new_schema:
                    merged["description"] = new_schema["description"]
                return SchemaValidator.sanitize_schema(merged)

        for key, value in new_schema.items():
            # "properties" maps argument names to schemas, so a property called "title" must survive.
            if key == "properties" and isinstance(value, dict):
                new_schema[key] = {name: SchemaValidator.sanitize_schema(prop) for name, prop in value.items()}
            elif isinstance(value, dict):
                new_schema[key] = SchemaValidator.sanitize_schema(value)
            elif isinstance(value, list):
                new_schema[key] = [
                    SchemaValidator.sanitize_schema(item) if isinstance(item, dict) else item for item in value
                ]

        return new_schema

    @classmethod
    def prepare(cls, schema: Any) -> Dict[str, Any]:
        """Resolve and sanitize a remote parameter schema, defaulting to an empty object schema.

        Raises:
            ToolValidationError: If the schema is not a JSON object.
        """
        if schema is None or schema == {}:
            return {"type": "object", "properties": {}}
        if not isinstance(schema, dict):
            msg = f"Tool parameters must be a JSON object schema, got {type(schema).__name__}."
            logger.error(msg)
            raise ToolValidationError(msg)
        return cls.sanitize_schema(cls.resolve_refs(schema))
