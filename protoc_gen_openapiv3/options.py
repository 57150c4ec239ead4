"""Annotation data carriers.

These models mirror the ``openapiv3`` proto options a service author can
attach to files and methods. They carry data only; the converter turns them
into OpenAPI objects.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Options(BaseModel):
    model_config = ConfigDict(extra='forbid', populate_by_name=True)


class Contact(_Options):
    name: str = ''
    url: str = ''
    email: str = ''


class License(_Options):
    name: str = ''
    url: str = ''


class Info(_Options):
    title: str = ''
    description: str = ''
    terms_of_service: str = ''
    contact: Contact | None = None
    license: License | None = None
    version: str = ''


class ServerVariable(_Options):
    enum: list[str] = Field(default_factory=list)
    default: str = ''
    description: str = ''


class Server(_Options):
    url: str = ''
    description: str = ''
    variables: dict[str, ServerVariable] = Field(default_factory=dict)


class OAuth2Scope(_Options):
    name: str
    description: str = ''


class OAuth2Flow(_Options):
    authorization_url: str = ''
    token_url: str = ''
    refresh_url: str = ''
    scopes: list[OAuth2Scope] = Field(default_factory=list)


class OAuth2Flows(_Options):
    implicit: OAuth2Flow | None = None
    authorization_code: OAuth2Flow | None = None
    client_credentials: OAuth2Flow | None = None
    password: OAuth2Flow | None = None


class SecurityScheme(_Options):
    """A security scheme declaration.

    ``type`` is one of ``apiKey``, ``http``, ``oauth2`` or ``openIdConnect``.
    ``key`` names the scheme in ``components.securitySchemes``; without it the
    scheme is keyed by ``name``, then by ``type``. For ``apiKey`` schemes
    ``name`` is the header, query or cookie parameter, so those usually need
    an explicit ``key``.
    """

    type: str
    key: str = ''
    description: str = ''
    name: str = ''
    in_: str = Field('', alias='in')
    scheme: str = ''
    bearer_format: str = ''
    flows: OAuth2Flows | None = None
    open_id_connect_url: str = ''


class SecurityRequirement(_Options):
    name: str
    scopes: list[str] = Field(default_factory=list)


class ExternalDocumentation(_Options):
    description: str = ''
    url: str = ''


class Tag(_Options):
    name: str
    description: str = ''
    external_docs: ExternalDocumentation | None = None


class Schema(_Options):
    """An annotation schema, converted to an OpenAPI schema verbatim.

    ``additional_properties`` is either ``True`` (any extra property allowed)
    or a nested schema.
    """

    type: str = ''
    format: str = ''
    title: str = ''
    description: str = ''
    default: str = ''
    enum: list[str] = Field(default_factory=list)
    nullable: bool = False
    read_only: bool = False
    write_only: bool = False
    deprecated: bool = False
    multiple_of: float = 0
    maximum: float = 0
    exclusive_maximum: bool = False
    minimum: float = 0
    exclusive_minimum: bool = False
    max_length: int = 0
    min_length: int = 0
    pattern: str = ''
    max_items: int = 0
    min_items: int = 0
    unique_items: bool = False
    max_properties: int = 0
    min_properties: int = 0
    required: list[str] = Field(default_factory=list)
    ref: str = ''
    properties: dict[str, Schema] = Field(default_factory=dict)
    additional_properties: bool | Schema | None = None
    items: Schema | None = None
    all_of: list[Schema] = Field(default_factory=list)
    one_of: list[Schema] = Field(default_factory=list)
    any_of: list[Schema] = Field(default_factory=list)
    not_: Schema | None = Field(None, alias='not')


class Example(_Options):
    summary: str = ''
    description: str = ''
    value: str = ''
    external_value: str = ''


class Encoding(_Options):
    content_type: str = ''
    style: str = ''
    explode: bool = False
    allow_reserved: bool = False


class MediaType(_Options):
    schema_: Schema | None = Field(None, alias='schema')
    examples: dict[str, Example] = Field(default_factory=dict)
    encoding: dict[str, Encoding] = Field(default_factory=dict)


class Parameter(_Options):
    name: str
    in_: str = Field('query', alias='in')
    description: str = ''
    required: bool = False
    deprecated: bool = False
    allow_empty_value: bool = False
    style: str = ''
    explode: bool = False
    allow_reserved: bool = False
    schema_: Schema | None = Field(None, alias='schema')
    example: str = ''
    examples: dict[str, Example] = Field(default_factory=dict)
    content: dict[str, MediaType] = Field(default_factory=dict)


class RequestBody(_Options):
    description: str = ''
    required: bool = False
    content: dict[str, MediaType] = Field(default_factory=dict)


class Header(_Options):
    description: str = ''
    required: bool = False
    deprecated: bool = False
    style: str = ''
    explode: bool = False
    schema_: Schema | None = Field(None, alias='schema')


class Link(_Options):
    operation_ref: str = ''
    operation_id: str = ''
    parameters: dict[str, str] = Field(default_factory=dict)
    request_body: str = ''
    description: str = ''
    server: Server | None = None


class Response(_Options):
    code: str = '200'
    description: str = ''
    content: dict[str, MediaType] = Field(default_factory=dict)
    headers: dict[str, Header] = Field(default_factory=dict)
    links: dict[str, Link] = Field(default_factory=dict)


class Operation(_Options):
    """Per-method overrides for the generated OpenAPI operation."""

    summary: str = ''
    description: str = ''
    deprecated: bool = False
    external_docs: ExternalDocumentation | None = None
    parameters: list[Parameter] = Field(default_factory=list)
    request_body: RequestBody | None = None
    responses: list[Response] = Field(default_factory=list)
    security: list[SecurityRequirement] = Field(default_factory=list)


Schema.model_rebuild()
