"""Schema resolution for messages, enums, fields and annotation schemas.

This module provides the SchemaResolver class. It turns field type variants
into OpenAPI schema fragments, turns named messages and enums into component
schemas registered once per document, and converts annotation schemas
verbatim. Every named type is embedded as a ``$ref``; only the call that first
registers a component ever sees its body.
"""

import logging
from dataclasses import dataclass

from protoc_gen_openapiv3 import options
from protoc_gen_openapiv3.compat import convert_v2_ref_to_v3
from protoc_gen_openapiv3.converter.primitives import NO_SCHEMA, map_primitive
from protoc_gen_openapiv3.converter.registry import (
    SCHEMA_REF_PREFIX,
    ComponentRegistry,
)
from protoc_gen_openapiv3.model import (
    MapType,
    OptionalType,
    ParsedEnum,
    ParsedField,
    ParsedFile,
    ParsedMessage,
    RepeatedType,
    strip_package,
)
from protoc_gen_openapiv3.openapi import Reference, Schema, SchemaType

logger = logging.getLogger(__name__)


@dataclass
class Resolution:
    """Outcome of resolving one named type.

    Attributes:
        reference: The ``$ref`` to the component, always present.
        body: The component body, set only on the call that registered it.
    """

    reference: Reference
    body: Schema | None = None

    @property
    def created(self) -> bool:
        return self.body is not None


class SchemaResolver:
    """Resolves proto types into OpenAPI schemas backed by a component registry.

    The resolver indexes the messages and enums of one ParsedFile by their
    unqualified names and shares a ComponentRegistry with the rest of the
    conversion. Cycles in the message graph are broken with an in-progress set
    owned by each top-level call: a type met again while it is still being
    built is emitted as a ``$ref`` to the component the outer call is about to
    register.

    Example:
        >>> resolver = SchemaResolver(parsed_file, ComponentRegistry())
        >>> resolver.resolve_named_type('test.package.User').ref
        '#/components/schemas/User'
    """

    def __init__(self, parsed_file: ParsedFile, registry: ComponentRegistry):
        """Initialize the resolver.

        Args:
            parsed_file: The file whose messages and enums can be resolved.
            registry: The document-scoped component registry.
        """
        self.registry = registry
        # Keyed by unqualified name; short-name collisions are rejected upstream
        self._messages: dict[str, ParsedMessage] = {
            strip_package(m.name): m for m in parsed_file.messages
        }
        self._enums: dict[str, ParsedEnum] = {strip_package(e.name): e for e in parsed_file.enums}

    def find_message(self, name: str) -> ParsedMessage | None:
        """Find a message by its unqualified name."""
        return self._messages.get(strip_package(name))

    def is_known_type(self, name: str) -> bool:
        """Check whether ``name`` is a message or enum of this file."""
        component = strip_package(name)
        return component in self._messages or component in self._enums

    def resolve_named_type(self, name: str) -> Reference:
        """Resolve a message or enum name to a ``$ref``, registering it if needed."""
        return self._resolve(name, set()).reference

    def message_schema(self, name: str) -> Schema | Reference:
        """Resolve a name for direct use as a top-level schema.

        Returns the component body when this call registers it and a ``$ref``
        on every later call for the same name.
        """
        resolution = self._resolve(name, set())
        if resolution.created:
            return resolution.body
        return resolution.reference

    def resolve_field(self, field: ParsedField) -> Schema | Reference:
        """Convert one field into a schema fragment."""
        return self._field_schema(field, set())

    def resolve_type(self, type_name: str, description: str = '') -> Schema | Reference:
        """Resolve a bare type name as a primitive or a named-type reference."""
        return self._type_schema(type_name, description, set())

    def _field_schema(self, field: ParsedField, in_progress: set[str]) -> Schema | Reference:
        field_type = field.type
        description = field.comment.strip()

        if isinstance(field_type, RepeatedType):
            return Schema(
                type=SchemaType.array,
                items=self._type_schema(field_type.item, '', in_progress),
                description=description or None,
            )

        if isinstance(field_type, OptionalType):
            return self._type_schema(field_type.inner, description, in_progress)

        if isinstance(field_type, MapType):
            if field_type.is_malformed:
                return Schema(type=SchemaType.object, description=description or None)
            return Schema(
                type=SchemaType.object,
                additionalProperties=self._type_schema(field_type.value, '', in_progress),
                description=description or None,
            )

        return self._type_schema(field_type.name, description, in_progress)

    def _type_schema(
        self, type_name: str, description: str, in_progress: set[str]
    ) -> Schema | Reference:
        primitive = map_primitive(type_name, description)
        if primitive is NO_SCHEMA:
            return Schema(description=description or None)
        if primitive is not None:
            return primitive
        return self._resolve(type_name, in_progress).reference

    def _resolve(self, name: str, in_progress: set[str]) -> Resolution:
        component = strip_package(name)
        reference = self.registry.reference(component)

        if component in in_progress:
            return Resolution(reference)
        if component in self.registry:
            return Resolution(reference)

        in_progress.add(component)
        try:
            message = self._messages.get(component)
            if message is not None:
                return self._register(component, self._message_body(message, in_progress))

            enum = self._enums.get(component)
            if enum is not None:
                return self._register(component, self._enum_body(enum))

            logger.warning(f"Unresolved type reference '{name}', emitting a dangling $ref")
            return Resolution(reference)
        finally:
            in_progress.discard(component)

    def _register(self, component: str, body: Schema) -> Resolution:
        reference = self.registry.reference(component)
        if component in self.registry:
            return Resolution(reference)
        self.registry.register(component, body)
        return Resolution(reference, body)

    def _message_body(self, message: ParsedMessage, in_progress: set[str]) -> Schema:
        properties: dict[str, Schema | Reference] = {}
        required: list[str] = []
        for field in message.fields:
            properties[field.name] = self._field_schema(field, in_progress)
            if not field.is_optional:
                required.append(field.name)

        return Schema(
            type=SchemaType.object,
            properties=properties or None,
            required=required or None,
            description=message.comment.strip() or None,
        )

    @staticmethod
    def _enum_body(enum: ParsedEnum) -> Schema:
        values = [value.name for value in enum.values]
        return Schema(
            type=SchemaType.string,
            enum=values or None,
            default=values[0] if values else None,
            description=enum.comment.strip() or None,
        )

    def convert_annotation_schema(
        self, schema: options.Schema | None
    ) -> Schema | Reference | None:
        """Convert an annotation schema into an OpenAPI schema.

        A ``$ref`` into ``#/components/schemas/`` that names a message or enum
        of this file registers that type, so the reference always resolves.
        """
        if schema is None:
            return None

        if schema.ref:
            ref = convert_v2_ref_to_v3(schema.ref)
            if ref.startswith(SCHEMA_REF_PREFIX):
                target = ref[len(SCHEMA_REF_PREFIX):]
                if self.is_known_type(target):
                    self.resolve_named_type(target)
            return Reference(ref=ref)

        converted = Schema(
            type=self._annotation_type(schema),
            format=schema.format or None,
            title=schema.title or None,
            description=schema.description or None,
            default=schema.default or None,
            enum=list(schema.enum) or None,
            readOnly=schema.read_only or None,
            writeOnly=schema.write_only or None,
            deprecated=schema.deprecated or None,
            multipleOf=schema.multiple_of or None,
            maxLength=schema.max_length or None,
            minLength=schema.min_length or None,
            pattern=schema.pattern or None,
            maxItems=schema.max_items or None,
            minItems=schema.min_items or None,
            uniqueItems=schema.unique_items or None,
            maxProperties=schema.max_properties or None,
            minProperties=schema.min_properties or None,
            required=list(schema.required) or None,
        )

        # OpenAPI 3.1 exclusive bounds are numeric
        if schema.exclusive_maximum:
            converted.exclusiveMaximum = schema.maximum
        elif schema.maximum:
            converted.maximum = schema.maximum
        if schema.exclusive_minimum:
            converted.exclusiveMinimum = schema.minimum
        elif schema.minimum:
            converted.minimum = schema.minimum

        if schema.properties:
            converted.properties = {
                name: self.convert_annotation_schema(prop)
                for name, prop in schema.properties.items()
            }
        if isinstance(schema.additional_properties, options.Schema):
            converted.additionalProperties = self.convert_annotation_schema(
                schema.additional_properties
            )
        elif schema.additional_properties:
            converted.additionalProperties = True
        if schema.items is not None:
            converted.items = self.convert_annotation_schema(schema.items)
        if schema.all_of:
            converted.allOf = [self.convert_annotation_schema(s) for s in schema.all_of]
        if schema.one_of:
            converted.oneOf = [self.convert_annotation_schema(s) for s in schema.one_of]
        if schema.any_of:
            converted.anyOf = [self.convert_annotation_schema(s) for s in schema.any_of]
        if schema.not_ is not None:
            converted.not_ = self.convert_annotation_schema(schema.not_)

        return converted

    @staticmethod
    def _annotation_type(schema: options.Schema) -> SchemaType | list[SchemaType] | None:
        if not schema.type:
            return None
        try:
            schema_type = SchemaType(schema.type)
        except ValueError:
            logger.warning(f"Ignoring unknown schema type '{schema.type}'")
            return None
        if schema.nullable:
            return [schema_type, SchemaType.null]
        return schema_type
