"""Document assembly.

This module provides the DocumentAssembler class and the convert_to_openapi
entry point. One call owns one ComponentRegistry; nothing is shared between
calls.
"""

import logging
from collections import Counter

from protoc_gen_openapiv3.compat import upgrade_legacy_annotations
from protoc_gen_openapiv3.config import GeneratorOptions
from protoc_gen_openapiv3.converter.components import (
    convert_info,
    convert_security_requirement,
    convert_security_scheme,
    convert_server,
    convert_tag,
    security_scheme_key,
)
from protoc_gen_openapiv3.converter.operations import OperationAssembler, bind_operation
from protoc_gen_openapiv3.converter.registry import ComponentRegistry
from protoc_gen_openapiv3.converter.schemas import SchemaResolver
from protoc_gen_openapiv3.exceptions import InputContractError
from protoc_gen_openapiv3.model import ParsedFile, strip_package
from protoc_gen_openapiv3.openapi import Components, OpenAPI, PathItem, Paths

logger = logging.getLogger(__name__)


def check_input_contract(parsed_file: ParsedFile | None) -> None:
    """Reject input the converter cannot turn into a consistent document.

    Raises:
        InputContractError: For a missing or empty file, or for messages and
            enums whose component names collide.
    """
    if parsed_file is None:
        raise InputContractError('parsed file is None')
    if parsed_file.is_empty:
        raise InputContractError(
            f"parsed file for package '{parsed_file.package}' declares no types or services"
        )

    names = Counter(
        strip_package(declared.name)
        for declared in [*parsed_file.messages, *parsed_file.enums]
    )
    collisions = sorted(name for name, count in names.items() if count > 1)
    if collisions:
        raise InputContractError('component name collision', collisions)


class DocumentAssembler:
    """Builds an OpenAPI document from a ParsedFile.

    Example:
        >>> assembler = DocumentAssembler(GeneratorOptions(include_package_in_tags=True))
        >>> document = assembler.convert(parsed_file)
    """

    def __init__(self, options: GeneratorOptions | None = None):
        self.options = options or GeneratorOptions()

    def convert(self, parsed_file: ParsedFile | None) -> OpenAPI:
        check_input_contract(parsed_file)
        if parsed_file.legacy_swagger:
            parsed_file = upgrade_legacy_annotations(parsed_file)

        registry = ComponentRegistry()
        resolver = SchemaResolver(parsed_file, registry)

        document = OpenAPI(
            openapi=self.options.openapi_version,
            info=convert_info(parsed_file.info or self.options.info, parsed_file.package),
        )

        servers = parsed_file.servers or self.options.servers
        if servers:
            document.servers = [convert_server(server) for server in servers]

        security_schemes = {}
        for scheme in parsed_file.security_schemes or self.options.security_schemes:
            converted = convert_security_scheme(scheme)
            if converted is not None:
                security_schemes[security_scheme_key(scheme)] = converted

        security = parsed_file.security or self.options.security
        if security:
            for requirement in security:
                if requirement.name not in security_schemes:
                    logger.warning(
                        f"Security requirement '{requirement.name}' names no declared security scheme"
                    )
            document.security = [convert_security_requirement(r) for r in security]

        tags = parsed_file.tags or self.options.tags
        if tags:
            document.tags = [convert_tag(tag) for tag in tags]

        paths: dict[str, PathItem] = {}
        assembler = OperationAssembler(
            resolver,
            package=parsed_file.package,
            include_package_in_tags=self.options.include_package_in_tags,
        )
        for service in parsed_file.services:
            for method in service.methods:
                path, verb, operation = assembler.assemble(method, service)
                bind_operation(paths, path, verb, operation)
        document.paths = Paths(paths)

        if self.options.include_all_messages:
            for message in parsed_file.messages:
                resolver.resolve_named_type(message.name)
            for enum in parsed_file.enums:
                resolver.resolve_named_type(enum.name)

        if len(registry) or security_schemes:
            document.components = Components(
                schemas=registry.as_dict() or None,
                securitySchemes=security_schemes or None,
            )

        logger.debug(
            f'Converted package {parsed_file.package!r}: '
            f'{len(paths)} path(s), {len(registry)} schema(s)'
        )
        return document


def convert_to_openapi(
    parsed_file: ParsedFile | None, options: GeneratorOptions | None = None
) -> OpenAPI:
    """Convert a ParsedFile into an OpenAPI 3.1 document."""
    return DocumentAssembler(options).convert(parsed_file)
