"""Operation assembly.

This module provides the OperationAssembler class, which combines a method's
routing, comment, annotation and message schemas into one OpenAPI operation,
and bind_operation, which places an operation into the paths map.
"""

import logging

from protoc_gen_openapiv3 import options
from protoc_gen_openapiv3.converter.components import (
    convert_external_docs,
    convert_security_requirement,
    convert_server,
)
from protoc_gen_openapiv3.converter.primitives import EMPTY_TYPE
from protoc_gen_openapiv3.converter.routing import (
    build_query_parameters,
    derive_routing,
    synthesize_path_parameters,
)
from protoc_gen_openapiv3.converter.schemas import SchemaResolver
from protoc_gen_openapiv3.model import ParsedMethod, ParsedService
from protoc_gen_openapiv3.openapi import (
    Encoding,
    Example,
    Header,
    Link,
    MediaType,
    Operation,
    Parameter,
    PathItem,
    RequestBody,
    Response,
    Responses,
)

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = 'application/json'

VERB_SLOTS = {
    'GET': 'get',
    'POST': 'post',
    'PUT': 'put',
    'PATCH': 'patch',
    'DELETE': 'delete',
}


def split_comment(comment: str) -> tuple[str, str]:
    """Split a comment into a summary (first line) and a description (the rest)."""
    lines = comment.strip().split('\n', 1)
    summary = lines[0].strip()
    description = lines[1].strip() if len(lines) > 1 else ''
    return summary, description


def bind_operation(
    paths: dict[str, PathItem], path: str, verb: str, operation: Operation
) -> PathItem:
    """Attach an operation to the path item for ``path`` under ``verb``.

    An unknown verb binds as POST. A second operation for the same path and
    verb replaces the first.
    """
    slot = VERB_SLOTS.get(verb.upper(), 'post')
    path_item = paths.get(path)
    if path_item is None:
        path_item = paths[path] = PathItem()

    existing = getattr(path_item, slot)
    if existing is not None:
        logger.warning(
            f'Operation {operation.operationId} overwrites {existing.operationId} '
            f'at {slot.upper()} {path}'
        )
    setattr(path_item, slot, operation)
    return path_item


class OperationAssembler:
    """Assembles OpenAPI operations for service methods."""

    def __init__(
        self,
        resolver: SchemaResolver,
        package: str = '',
        include_package_in_tags: bool = False,
    ):
        self.resolver = resolver
        self.package = package
        self.include_package_in_tags = include_package_in_tags

    def service_tag(self, service: ParsedService) -> str:
        if self.include_package_in_tags and self.package:
            return f'{self.package}.{service.name}'
        return service.name

    def assemble(
        self, method: ParsedMethod, service: ParsedService
    ) -> tuple[str, str, Operation]:
        """Build the operation for ``method``.

        Returns:
            The path template, the HTTP verb and the operation.
        """
        routing = derive_routing(method)
        annotation = method.operation

        summary, description = split_comment(method.comment)
        if annotation is not None:
            summary = annotation.summary or summary
            description = annotation.description or description

        operation = Operation(
            operationId=method.name,
            summary=summary or None,
            description=description or None,
            tags=[self.service_tag(service)],
        )

        if annotation is not None:
            if annotation.deprecated:
                operation.deprecated = True
            external_docs = convert_external_docs(annotation.external_docs)
            if external_docs is not None:
                operation.externalDocs = external_docs
            if annotation.security:
                operation.security = [
                    convert_security_requirement(requirement)
                    for requirement in annotation.security
                ]

        parameters = self._parameters(method, routing)
        if parameters:
            operation.parameters = parameters

        request_body = self._request_body(method, routing.body_field)
        if request_body is not None:
            operation.requestBody = request_body

        operation.responses = self._responses(method)
        return routing.path, routing.verb, operation

    def _parameters(self, method, routing) -> list[Parameter]:
        parameters = []
        if method.operation is not None:
            parameters = [self.convert_parameter(p) for p in method.operation.parameters]

        declared_path = {p.name for p in parameters if p.in_ == 'path'}
        parameters.extend(synthesize_path_parameters(routing.path_params, declared_path))

        input_message = self.resolver.find_message(method.input_type)
        if input_message is not None:
            parameters.extend(
                build_query_parameters(
                    input_message,
                    routing,
                    self.resolver,
                    exclude={p.name for p in parameters},
                )
            )
        return parameters

    def _request_body(self, method: ParsedMethod, body_field: str) -> RequestBody | None:
        request_body = None
        if method.operation is not None and method.operation.request_body is not None:
            request_body = self.convert_request_body(method.operation.request_body)

        if body_field:
            if request_body is None:
                request_body = RequestBody(content={})
            if JSON_MEDIA_TYPE not in request_body.content:
                request_body.content[JSON_MEDIA_TYPE] = MediaType(
                    schema_=self.resolver.resolve_type(method.input_type)
                )
        return request_body

    def _responses(self, method: ParsedMethod) -> Responses:
        if method.operation is not None and method.operation.responses:
            return Responses(
                {
                    response.code or '200': self.convert_response(response)
                    for response in method.operation.responses
                }
            )

        response = Response(description=f'Response for {method.name} operation')
        if method.output_type != EMPTY_TYPE:
            response.content = {
                JSON_MEDIA_TYPE: MediaType(
                    schema_=self.resolver.resolve_type(method.output_type)
                )
            }
        return Responses({'200': response})

    def convert_parameter(self, parameter: options.Parameter) -> Parameter:
        location = parameter.in_ or 'query'
        result = Parameter(
            name=parameter.name,
            in_=location,
            description=parameter.description or None,
            # path parameters are always required
            required=parameter.required or location == 'path' or None,
        )
        if parameter.deprecated:
            result.deprecated = True
        if parameter.allow_empty_value:
            result.allowEmptyValue = True
        if parameter.style:
            result.style = parameter.style
        if parameter.explode:
            result.explode = True
        if parameter.allow_reserved:
            result.allowReserved = True
        if parameter.schema_ is not None:
            result.schema_ = self.resolver.convert_annotation_schema(parameter.schema_)
        if parameter.example:
            result.example = parameter.example
        if parameter.examples:
            result.examples = self._examples(parameter.examples)
        if parameter.content:
            result.content = self._content(parameter.content)
        return result

    def convert_request_body(self, request_body: options.RequestBody) -> RequestBody:
        return RequestBody(
            description=request_body.description or None,
            required=request_body.required or None,
            content=self._content(request_body.content),
        )

    def convert_response(self, response: options.Response) -> Response:
        result = Response(description=response.description)
        if response.content:
            result.content = self._content(response.content)
        if response.headers:
            result.headers = {
                name: Header(
                    description=header.description or None,
                    required=header.required or None,
                    deprecated=header.deprecated or None,
                    style=header.style or None,
                    explode=header.explode or None,
                    schema_=self.resolver.convert_annotation_schema(header.schema_),
                )
                for name, header in response.headers.items()
            }
        if response.links:
            result.links = {name: self._link(link) for name, link in response.links.items()}
        return result

    def _content(self, content: dict[str, options.MediaType]) -> dict[str, MediaType]:
        converted = {}
        for media_type, media in content.items():
            result = MediaType(
                schema_=self.resolver.convert_annotation_schema(media.schema_)
            )
            if media.examples:
                result.examples = self._examples(media.examples)
            if media.encoding:
                result.encoding = {
                    name: Encoding(
                        contentType=encoding.content_type or None,
                        style=encoding.style or None,
                        explode=encoding.explode or None,
                        allowReserved=encoding.allow_reserved or None,
                    )
                    for name, encoding in media.encoding.items()
                }
            converted[media_type] = result
        return converted

    @staticmethod
    def _examples(examples: dict[str, options.Example]) -> dict[str, Example]:
        return {
            name: Example(
                summary=example.summary or None,
                description=example.description or None,
                value=example.value or None,
                externalValue=example.external_value or None,
            )
            for name, example in examples.items()
        }

    @staticmethod
    def _link(link: options.Link) -> Link:
        result = Link(
            operationRef=link.operation_ref or None,
            operationId=link.operation_id or None,
            parameters=dict(link.parameters) or None,
            requestBody=link.request_body or None,
            description=link.description or None,
        )
        if link.server is not None:
            result.server = convert_server(link.server)
        return result
