"""Conversion of a ParsedFile into an OpenAPI document."""

from protoc_gen_openapiv3.converter.document import (
    DocumentAssembler,
    check_input_contract,
    convert_to_openapi,
)
from protoc_gen_openapiv3.converter.operations import OperationAssembler, bind_operation
from protoc_gen_openapiv3.converter.primitives import NO_SCHEMA, map_primitive
from protoc_gen_openapiv3.converter.registry import ComponentRegistry
from protoc_gen_openapiv3.converter.routing import Routing, derive_routing
from protoc_gen_openapiv3.converter.schemas import SchemaResolver

__all__ = [
    'ComponentRegistry',
    'DocumentAssembler',
    'NO_SCHEMA',
    'OperationAssembler',
    'Routing',
    'SchemaResolver',
    'bind_operation',
    'check_input_contract',
    'convert_to_openapi',
    'derive_routing',
    'map_primitive',
]
