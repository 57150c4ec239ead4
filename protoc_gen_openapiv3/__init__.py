"""protoc-gen-openapiv3 - Generate OpenAPI 3.1 documents from protobuf services.

protoc-gen-openapiv3 is a protoc plugin that turns service definitions, their
``google.api.http`` routing and their comments into an OpenAPI 3.1 document
with one operation per method and one component schema per message or enum.

Quick Start:
    >>> from protoc_gen_openapiv3 import DescriptionLoader, convert_to_openapi
    >>>
    >>> parsed_file = DescriptionLoader().load_one('./user_service.yaml')
    >>> document = convert_to_openapi(parsed_file)

Plugin Usage:
    $ protoc --openapiv3_out=. --openapiv3_opt=output_format=json user.proto
    $ protoc --openapiv3_out=. --openapiv3_opt=allow_merge=true *.proto

CLI Usage:
    $ openapiv3 generate ./user_service.yaml -o openapi.yaml
    $ openapiv3 generate ./descriptors.binpb -f json
    $ openapiv3 schema ./user_service.yaml User
"""

from protoc_gen_openapiv3._version import version as __version__
from protoc_gen_openapiv3.config import GeneratorOptions, get_config, parse_plugin_parameter
from protoc_gen_openapiv3.converter import (
    ComponentRegistry,
    DocumentAssembler,
    SchemaResolver,
    convert_to_openapi,
)
from protoc_gen_openapiv3.exceptions import (
    ConfigurationError,
    DescriptionLoadError,
    DescriptorError,
    InputContractError,
    OutputError,
    ProtoOpenAPIError,
    UnsupportedFeatureError,
)
from protoc_gen_openapiv3.loader import DescriptionLoader
from protoc_gen_openapiv3.model import ParsedFile
from protoc_gen_openapiv3.writer import DocumentWriter

__all__ = [
    '__version__',
    # Conversion
    'convert_to_openapi',
    'DocumentAssembler',
    'SchemaResolver',
    'ComponentRegistry',
    'ParsedFile',
    # Loading and writing
    'DescriptionLoader',
    'DocumentWriter',
    # Configuration
    'GeneratorOptions',
    'get_config',
    'parse_plugin_parameter',
    # Exceptions
    'ProtoOpenAPIError',
    'InputContractError',
    'DescriptorError',
    'DescriptionLoadError',
    'ConfigurationError',
    'OutputError',
    'UnsupportedFeatureError',
]
