"""Pydantic models of the OpenAPI 3.1 objects this generator emits.

Only the objects and keywords the converter produces are modelled. Callbacks,
webhooks, discriminators and XML metadata are out of scope. Field names use
the OpenAPI spelling; Python keywords (``in``, ``not``) and names that shadow
BaseModel attributes (``schema``) carry an alias instead.

Documents are serialized with ``model_dump(by_alias=True, exclude_none=True)``,
so every optional field defaults to None.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel

COMPONENT_KEY_PATTERN = r'^[a-zA-Z0-9\.\-_]+$'
OPENAPI_VERSION_PATTERN = r'^3\.1\.\d+(-.+)?$'

ComponentKey = Annotated[str, Field(pattern=COMPONENT_KEY_PATTERN)]


class _Object(BaseModel):
    model_config = ConfigDict(extra='forbid', populate_by_name=True)


class SchemaType(Enum):
    array = 'array'
    boolean = 'boolean'
    integer = 'integer'
    number = 'number'
    object = 'object'
    string = 'string'
    null = 'null'


class Reference(_Object):
    """A ``$ref`` to a component, e.g. ``#/components/schemas/User``."""

    ref: str = Field(..., alias='$ref')
    summary: Optional[str] = None
    description: Optional[str] = None


# Document metadata


class Contact(_Object):
    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None


class License(_Object):
    name: str
    identifier: Optional[str] = None
    url: Optional[str] = None


class Info(_Object):
    title: str
    summary: Optional[str] = None
    description: Optional[str] = None
    termsOfService: Optional[str] = None
    contact: Optional[Contact] = None
    license: Optional[License] = None
    version: str


class ServerVariable(_Object):
    enum: Optional[List[str]] = None
    default: str
    description: Optional[str] = None


class Server(_Object):
    url: str
    description: Optional[str] = None
    variables: Optional[Dict[str, ServerVariable]] = None


class ExternalDocumentation(_Object):
    description: Optional[str] = None
    url: str


class Tag(_Object):
    name: str
    description: Optional[str] = None
    externalDocs: Optional[ExternalDocumentation] = None


# Schemas


class Schema(_Object):
    """A JSON Schema 2020-12 object.

    ``type`` is a list when a schema is nullable, e.g. ``['string', 'null']``.
    Exclusive bounds use the numeric 3.1 form.
    """

    title: Optional[str] = None
    multipleOf: Optional[Annotated[float, Field(gt=0)]] = None
    maximum: Optional[float] = None
    exclusiveMaximum: Optional[float] = None
    minimum: Optional[float] = None
    exclusiveMinimum: Optional[float] = None
    maxLength: Optional[Annotated[int, Field(ge=0)]] = None
    minLength: Optional[Annotated[int, Field(ge=0)]] = None
    pattern: Optional[str] = None
    maxItems: Optional[Annotated[int, Field(ge=0)]] = None
    minItems: Optional[Annotated[int, Field(ge=0)]] = None
    uniqueItems: Optional[bool] = None
    maxProperties: Optional[Annotated[int, Field(ge=0)]] = None
    minProperties: Optional[Annotated[int, Field(ge=0)]] = None
    required: Optional[List[str]] = None
    enum: Optional[List[Any]] = None
    type: Optional[Union[SchemaType, List[SchemaType]]] = None

    not_: Optional[Union[Schema, Reference]] = Field(None, alias='not')
    allOf: Optional[List[Union[Schema, Reference]]] = None
    oneOf: Optional[List[Union[Schema, Reference]]] = None
    anyOf: Optional[List[Union[Schema, Reference]]] = None

    items: Optional[Union[Schema, Reference]] = None
    properties: Optional[Dict[str, Union[Schema, Reference]]] = None
    additionalProperties: Optional[Union[Schema, Reference, bool]] = None

    format: Optional[str] = None
    description: Optional[str] = None
    default: Optional[Any] = None
    readOnly: Optional[bool] = None
    writeOnly: Optional[bool] = None
    example: Optional[Any] = None
    externalDocs: Optional[ExternalDocumentation] = None
    deprecated: Optional[bool] = None


# Security


class APIKeySecurityScheme(_Object):
    type: Literal['apiKey']
    name: str
    in_: Literal['query', 'header', 'cookie'] = Field(..., alias='in')
    description: Optional[str] = None


class HTTPSecurityScheme(_Object):
    type: Literal['http']
    scheme: str
    bearerFormat: Optional[str] = None
    description: Optional[str] = None


class OAuthFlow(_Object):
    """One OAuth2 flow; which URLs are required depends on the flow kind."""

    authorizationUrl: Optional[str] = None
    tokenUrl: Optional[str] = None
    refreshUrl: Optional[str] = None
    scopes: Dict[str, str]


class OAuthFlows(_Object):
    implicit: Optional[OAuthFlow] = None
    password: Optional[OAuthFlow] = None
    clientCredentials: Optional[OAuthFlow] = None
    authorizationCode: Optional[OAuthFlow] = None


class OAuth2SecurityScheme(_Object):
    type: Literal['oauth2']
    flows: OAuthFlows
    description: Optional[str] = None


class OpenIdConnectSecurityScheme(_Object):
    type: Literal['openIdConnect']
    openIdConnectUrl: str
    description: Optional[str] = None


class SecurityScheme(
    RootModel[
        Annotated[
            Union[
                APIKeySecurityScheme,
                HTTPSecurityScheme,
                OAuth2SecurityScheme,
                OpenIdConnectSecurityScheme,
            ],
            Field(discriminator='type'),
        ]
    ]
):
    """A security scheme, selected by its ``type``."""


class SecurityRequirement(RootModel[Dict[str, List[str]]]):
    """Scheme name mapped to the required scopes."""


# Operations


class Example(_Object):
    summary: Optional[str] = None
    description: Optional[str] = None
    value: Optional[Any] = None
    externalValue: Optional[str] = None


class Header(_Object):
    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    style: Optional[str] = None
    explode: Optional[bool] = None
    schema_: Optional[Union[Schema, Reference]] = Field(None, alias='schema')


class Encoding(_Object):
    contentType: Optional[str] = None
    headers: Optional[Dict[str, Union[Header, Reference]]] = None
    style: Optional[str] = None
    explode: Optional[bool] = None
    allowReserved: Optional[bool] = None


class MediaType(_Object):
    schema_: Optional[Union[Schema, Reference]] = Field(None, alias='schema')
    example: Optional[Any] = None
    examples: Optional[Dict[str, Union[Example, Reference]]] = None
    encoding: Optional[Dict[str, Encoding]] = None


class Parameter(_Object):
    name: str
    in_: str = Field(..., alias='in')
    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    allowEmptyValue: Optional[bool] = None
    style: Optional[str] = None
    explode: Optional[bool] = None
    allowReserved: Optional[bool] = None
    schema_: Optional[Union[Schema, Reference]] = Field(None, alias='schema')
    content: Optional[Dict[str, MediaType]] = None
    example: Optional[Any] = None
    examples: Optional[Dict[str, Union[Example, Reference]]] = None


class RequestBody(_Object):
    description: Optional[str] = None
    content: Dict[str, MediaType]
    required: Optional[bool] = None


class Link(_Object):
    operationId: Optional[str] = None
    operationRef: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None
    requestBody: Optional[Any] = None
    description: Optional[str] = None
    server: Optional[Server] = None


class Response(_Object):
    description: str
    headers: Optional[Dict[str, Union[Header, Reference]]] = None
    content: Optional[Dict[str, MediaType]] = None
    links: Optional[Dict[str, Union[Link, Reference]]] = None


class Responses(RootModel[Dict[str, Union[Response, Reference]]]):
    """Responses keyed by status code string."""


class Operation(_Object):
    tags: Optional[List[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    externalDocs: Optional[ExternalDocumentation] = None
    operationId: Optional[str] = None
    parameters: Optional[List[Union[Parameter, Reference]]] = None
    requestBody: Optional[Union[RequestBody, Reference]] = None
    responses: Optional[Responses] = None
    deprecated: Optional[bool] = None
    security: Optional[List[SecurityRequirement]] = None


class PathItem(_Object):
    """Operations of one path template, one slot per HTTP verb."""

    summary: Optional[str] = None
    description: Optional[str] = None
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    patch: Optional[Operation] = None


class Paths(RootModel[Dict[str, PathItem]]):
    """Path items keyed by path template."""


# Document


class Components(_Object):
    schemas: Optional[Dict[ComponentKey, Union[Schema, Reference]]] = None
    securitySchemes: Optional[Dict[ComponentKey, Union[SecurityScheme, Reference]]] = None


class OpenAPI(_Object):
    """The root document."""

    openapi: Annotated[str, Field(pattern=OPENAPI_VERSION_PATTERN)]
    info: Info
    jsonSchemaDialect: Optional[str] = None
    servers: Optional[List[Server]] = None
    paths: Optional[Paths] = None
    components: Optional[Components] = None
    security: Optional[List[SecurityRequirement]] = None
    tags: Optional[List[Tag]] = None
    externalDocs: Optional[ExternalDocumentation] = None


Schema.model_rebuild()
