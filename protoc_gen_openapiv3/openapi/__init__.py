from protoc_gen_openapiv3.openapi.v3_1 import (
    APIKeySecurityScheme,
    Components,
    Contact,
    Encoding,
    Example,
    ExternalDocumentation,
    Header,
    HTTPSecurityScheme,
    Info,
    License,
    Link,
    MediaType,
    OAuth2SecurityScheme,
    OAuthFlow,
    OAuthFlows,
    OpenAPI,
    OpenIdConnectSecurityScheme,
    Operation,
    Parameter,
    PathItem,
    Paths,
    Reference,
    RequestBody,
    Response,
    Responses,
    Schema,
    SchemaType,
    SecurityRequirement,
    SecurityScheme,
    Server,
    ServerVariable,
    Tag,
)

__all__ = [
    'APIKeySecurityScheme',
    'Components',
    'Contact',
    'Encoding',
    'Example',
    'ExternalDocumentation',
    'HTTPSecurityScheme',
    'Header',
    'Info',
    'License',
    'Link',
    'MediaType',
    'OAuth2SecurityScheme',
    'OAuthFlow',
    'OAuthFlows',
    'OpenAPI',
    'OpenIdConnectSecurityScheme',
    'Operation',
    'Parameter',
    'PathItem',
    'Paths',
    'Reference',
    'RequestBody',
    'Response',
    'Responses',
    'Schema',
    'SchemaType',
    'SecurityRequirement',
    'SecurityScheme',
    'Server',
    'ServerVariable',
    'Tag',
]
