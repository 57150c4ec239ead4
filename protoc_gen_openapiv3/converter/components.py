"""Conversion of document-level annotations into OpenAPI objects."""

import logging

from pydantic import ValidationError

from protoc_gen_openapiv3 import options
from protoc_gen_openapiv3.openapi import (
    Contact,
    ExternalDocumentation,
    Info,
    License,
    SecurityRequirement,
    SecurityScheme,
    Server,
    ServerVariable,
    Tag,
)

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = '1.0.0'


def convert_info(info: options.Info | None, package: str) -> Info:
    """Build the document info, defaulting the title to the package name."""
    result = Info(title=package, version=DEFAULT_API_VERSION)
    if info is None:
        return result

    if info.title:
        result.title = info.title
    if info.version:
        result.version = info.version
    if info.description:
        result.description = info.description
    if info.terms_of_service:
        result.termsOfService = info.terms_of_service
    if info.contact is not None:
        result.contact = Contact(
            name=info.contact.name or None,
            url=info.contact.url or None,
            email=info.contact.email or None,
        )
    if info.license is not None and info.license.name:
        result.license = License(name=info.license.name, url=info.license.url or None)
    return result


def convert_server(server: options.Server) -> Server:
    result = Server(url=server.url, description=server.description or None)
    if server.variables:
        result.variables = {
            name: ServerVariable(
                default=variable.default,
                enum=list(variable.enum) or None,
                description=variable.description or None,
            )
            for name, variable in server.variables.items()
        }
    return result


def convert_external_docs(
    docs: options.ExternalDocumentation | None,
) -> ExternalDocumentation | None:
    if docs is None or not docs.url:
        return None
    return ExternalDocumentation(url=docs.url, description=docs.description or None)


def convert_tag(tag: options.Tag) -> Tag:
    result = Tag(name=tag.name, description=tag.description or None)
    external_docs = convert_external_docs(tag.external_docs)
    if external_docs is not None:
        result.externalDocs = external_docs
    return result


def convert_security_requirement(
    requirement: options.SecurityRequirement,
) -> SecurityRequirement:
    return SecurityRequirement({requirement.name: list(requirement.scopes)})


def security_scheme_key(scheme: options.SecurityScheme) -> str:
    """Name a scheme in ``components.securitySchemes``."""
    return scheme.key or scheme.name or scheme.type


def _convert_flow(flow: options.OAuth2Flow) -> dict:
    data = {'scopes': {scope.name: scope.description for scope in flow.scopes}}
    if flow.authorization_url:
        data['authorizationUrl'] = flow.authorization_url
    if flow.token_url:
        data['tokenUrl'] = flow.token_url
    if flow.refresh_url:
        data['refreshUrl'] = flow.refresh_url
    return data


def convert_security_scheme(scheme: options.SecurityScheme) -> SecurityScheme | None:
    """Convert a security scheme annotation.

    Returns None, after logging a warning, for an unknown scheme type or a
    scheme missing the fields its type requires.
    """
    data: dict = {'type': scheme.type}
    if scheme.description:
        data['description'] = scheme.description

    if scheme.type == 'apiKey':
        data['name'] = scheme.name
        data['in'] = scheme.in_ or 'header'
    elif scheme.type == 'http':
        data['scheme'] = scheme.scheme or 'bearer'
        if scheme.bearer_format:
            data['bearerFormat'] = scheme.bearer_format
    elif scheme.type == 'oauth2':
        flows = scheme.flows or options.OAuth2Flows()
        data['flows'] = {
            key: _convert_flow(flow)
            for key, flow in (
                ('implicit', flows.implicit),
                ('password', flows.password),
                ('clientCredentials', flows.client_credentials),
                ('authorizationCode', flows.authorization_code),
            )
            if flow is not None
        }
    elif scheme.type == 'openIdConnect':
        data['openIdConnectUrl'] = scheme.open_id_connect_url
    else:
        logger.warning(f"Skipping security scheme with unknown type '{scheme.type}'")
        return None

    try:
        return SecurityScheme.model_validate(data)
    except ValidationError as e:
        logger.warning(
            f"Skipping invalid security scheme '{security_scheme_key(scheme)}': "
            f'{e.error_count()} validation error(s)'
        )
        return None
