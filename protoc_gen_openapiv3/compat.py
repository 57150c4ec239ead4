"""Upgrade of OpenAPI v2 (grpc-gateway style) annotations.

Files annotated for the v2 generator carry a ``legacy_swagger`` block. This
module maps the parts of it that have a v3 counterpart onto the ParsedFile:
info, security definitions, global security, tags and the server derived from
host, base path and schemes. Annotations already present in v3 form win.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field

from protoc_gen_openapiv3 import options
from protoc_gen_openapiv3.model import ParsedFile

logger = logging.getLogger(__name__)

V2_DEFINITIONS_PREFIX = '#/definitions/'
V3_SCHEMAS_PREFIX = '#/components/schemas/'


class _Legacy(BaseModel):
    # v2 annotations carry many fields without a v3 counterpart
    model_config = ConfigDict(extra='ignore')


class LegacyContact(_Legacy):
    name: str = ''
    url: str = ''
    email: str = ''


class LegacyLicense(_Legacy):
    name: str = ''
    url: str = ''


class LegacyInfo(_Legacy):
    title: str = ''
    description: str = ''
    terms_of_service: str = ''
    version: str = ''
    contact: LegacyContact | None = None
    license: LegacyLicense | None = None


class LegacyScopes(_Legacy):
    scope: dict[str, str] = Field(default_factory=dict)


class LegacySecurityScheme(_Legacy):
    type: str = ''
    description: str = ''
    name: str = ''
    flow: str = ''
    authorization_url: str = ''
    token_url: str = ''
    scopes: LegacyScopes | None = None


class LegacySecurityDefinitions(_Legacy):
    security: dict[str, LegacySecurityScheme] = Field(default_factory=dict)


class LegacyScopeList(_Legacy):
    scope: list[str] = Field(default_factory=list)


class LegacySecurityRequirement(_Legacy):
    security_requirement: dict[str, LegacyScopeList | None] = Field(default_factory=dict)


class LegacyExternalDocs(_Legacy):
    description: str = ''
    url: str = ''


class LegacyTag(_Legacy):
    name: str
    description: str = ''
    external_docs: LegacyExternalDocs | None = None


class LegacySwagger(_Legacy):
    info: LegacyInfo | None = None
    host: str = ''
    base_path: str = ''
    schemes: list[str] = Field(default_factory=list)
    security_definitions: LegacySecurityDefinitions | None = None
    security: list[LegacySecurityRequirement] = Field(default_factory=list)
    tags: list[LegacyTag] = Field(default_factory=list)


def _enum_name(value: str, prefix: str) -> str:
    """Normalize ``TYPE_API_KEY``, ``API_KEY`` and ``api_key`` alike."""
    value = value.upper()
    if value.startswith(prefix):
        value = value[len(prefix):]
    return value


def convert_v2_ref_to_v3(ref: str) -> str:
    """Rewrite a ``#/definitions/`` reference into ``#/components/schemas/``.

    >>> convert_v2_ref_to_v3('#/definitions/User')
    '#/components/schemas/User'
    """
    if ref.startswith(V2_DEFINITIONS_PREFIX):
        return V3_SCHEMAS_PREFIX + ref[len(V2_DEFINITIONS_PREFIX):]
    return ref


def convert_info(info: LegacyInfo) -> options.Info:
    result = options.Info(
        title=info.title,
        description=info.description,
        terms_of_service=info.terms_of_service,
        version=info.version,
    )
    if info.contact is not None:
        result.contact = options.Contact(**info.contact.model_dump())
    if info.license is not None:
        result.license = options.License(**info.license.model_dump())
    return result


def convert_security_scheme(name: str, scheme: LegacySecurityScheme) -> options.SecurityScheme | None:
    kind = _enum_name(scheme.type, 'TYPE_')

    if kind == 'BASIC':
        return options.SecurityScheme(
            type='http', key=name, scheme='basic', description=scheme.description
        )

    if kind == 'API_KEY':
        return options.SecurityScheme(
            type='apiKey',
            key=name,
            in_='header',
            name=scheme.name,
            description=scheme.description,
        )

    if kind == 'OAUTH2':
        result = options.SecurityScheme(
            type='oauth2', key=name, description=scheme.description
        )
        if _enum_name(scheme.flow, 'FLOW_') == 'ACCESS_CODE':
            scopes = scheme.scopes.scope if scheme.scopes is not None else {}
            result.flows = options.OAuth2Flows(
                authorization_code=options.OAuth2Flow(
                    authorization_url=scheme.authorization_url,
                    token_url=scheme.token_url,
                    scopes=[
                        options.OAuth2Scope(name=scope, description=description)
                        for scope, description in scopes.items()
                    ],
                )
            )
        else:
            logger.warning(f"OAuth2 flow '{scheme.flow}' of security definition '{name}' is not converted")
        return result

    logger.warning(f"Skipping security definition '{name}' with type '{scheme.type}'")
    return None


def convert_security(requirements: list[LegacySecurityRequirement]) -> list[options.SecurityRequirement]:
    converted = []
    for requirement in requirements:
        for name, scopes in requirement.security_requirement.items():
            converted.append(
                options.SecurityRequirement(
                    name=name, scopes=list(scopes.scope) if scopes is not None else []
                )
            )
    return converted


def convert_tag(tag: LegacyTag) -> options.Tag:
    result = options.Tag(name=tag.name, description=tag.description)
    if tag.external_docs is not None:
        result.external_docs = options.ExternalDocumentation(
            description=tag.external_docs.description, url=tag.external_docs.url
        )
    return result


def convert_server(host: str, base_path: str, schemes: list[str]) -> options.Server | None:
    """Build a server from the v2 host, base path and schemes.

    >>> convert_server('api.example.com', '/v1', []).url
    'https://api.example.com/v1'
    """
    if not host:
        return None
    scheme = schemes[0].lower() if schemes else 'https'
    return options.Server(url=f'{scheme}://{host}{base_path}', description=f'Server for {host}')


def upgrade_legacy_annotations(parsed_file: ParsedFile) -> ParsedFile:
    """Return a copy of ``parsed_file`` with its v2 annotations upgraded."""
    if not parsed_file.legacy_swagger:
        return parsed_file

    swagger = LegacySwagger.model_validate(parsed_file.legacy_swagger)
    update = {'legacy_swagger': None}

    if swagger.info is not None and parsed_file.info is None:
        update['info'] = convert_info(swagger.info)

    if swagger.security_definitions is not None:
        schemes = [
            convert_security_scheme(name, scheme)
            for name, scheme in swagger.security_definitions.security.items()
        ]
        update['security_schemes'] = [
            *parsed_file.security_schemes,
            *(scheme for scheme in schemes if scheme is not None),
        ]

    if swagger.security:
        update['security'] = [*parsed_file.security, *convert_security(swagger.security)]

    if swagger.tags:
        update['tags'] = [*parsed_file.tags, *(convert_tag(tag) for tag in swagger.tags)]

    server = convert_server(swagger.host, swagger.base_path, swagger.schemes)
    if server is not None and not parsed_file.servers:
        update['servers'] = [server]

    return parsed_file.model_copy(update=update)
