"""Scalar proto types to OpenAPI primitive schemas."""

from protoc_gen_openapiv3.openapi import Schema, SchemaType

__all__ = ('EMPTY_TYPE', 'NO_SCHEMA', 'NoSchema', 'TIMESTAMP_TYPE', 'map_primitive')

TIMESTAMP_TYPE = 'google.protobuf.Timestamp'
EMPTY_TYPE = 'google.protobuf.Empty'


class NoSchema:
    """Marker for a type that carries no payload at all."""

    def __repr__(self) -> str:
        return 'NO_SCHEMA'


NO_SCHEMA = NoSchema()

_PRIMITIVES: dict[str, tuple[SchemaType, str | None]] = {
    'string': (SchemaType.string, None),
    'bytes': (SchemaType.string, None),
    'int32': (SchemaType.integer, None),
    'int64': (SchemaType.integer, None),
    'uint32': (SchemaType.integer, None),
    'uint64': (SchemaType.integer, None),
    'float': (SchemaType.number, None),
    'double': (SchemaType.number, None),
    'bool': (SchemaType.boolean, None),
    TIMESTAMP_TYPE: (SchemaType.string, 'date-time'),
}


def map_primitive(type_name: str, description: str = '') -> Schema | NoSchema | None:
    """Map a scalar or well-known type name onto a primitive schema.

    Returns NO_SCHEMA for the well-known Empty type and None for any name that
    is not a primitive, which callers treat as a message or enum reference.
    """
    if type_name == EMPTY_TYPE:
        return NO_SCHEMA

    primitive = _PRIMITIVES.get(type_name)
    if primitive is None:
        return None

    schema_type, schema_format = primitive
    return Schema(type=schema_type, format=schema_format, description=description or None)
