"""HTTP routing for service methods.

Derives the verb, path template, path parameters and body field of a method,
and builds the path and query parameters that follow from them.
"""

import re
from dataclasses import dataclass

from protoc_gen_openapiv3.converter.schemas import SchemaResolver
from protoc_gen_openapiv3.model import ParsedMessage, ParsedMethod, RepeatedType
from protoc_gen_openapiv3.openapi import Parameter, Schema, SchemaType

PATH_PARAMETER_PATTERN = re.compile(r'\{([^}]*)\}')
DEFAULT_VERB = 'POST'
WHOLE_MESSAGE_BODY = '*'


@dataclass(frozen=True)
class Routing:
    """HTTP routing of one method."""

    verb: str
    path: str
    path_params: tuple[str, ...] = ()
    body_field: str = ''


def method_name_to_path(name: str) -> str:
    """Turn a method name into a hyphenated lowercase path.

    >>> method_name_to_path('GetUser')
    '/get-user'
    """
    chars = []
    for index, char in enumerate(name):
        if index > 0 and char.isupper():
            chars.append('-')
        chars.append(char.lower())
    return '/' + ''.join(chars)


def extract_path_parameters(path: str) -> list[str]:
    """Extract parameter names from a path template, left to right.

    Field-path placeholders such as ``{user.id}`` contribute their last
    segment only. A name bound more than once is listed once.

    >>> extract_path_parameters('/v1/{parent.name}/items/{item_id}')
    ['name', 'item_id']
    """
    names = []
    for placeholder in PATH_PARAMETER_PATTERN.findall(path):
        # {name=pattern/*} binds the field before '='
        placeholder = placeholder.split('=', 1)[0].strip()
        name = placeholder.rsplit('.', 1)[-1]
        if name and name not in names:
            names.append(name)
    return names


def derive_routing(method: ParsedMethod) -> Routing:
    """Compute the routing of a method.

    An explicit path is used verbatim; otherwise one is derived from the method
    name. A method without an explicit verb is routed as POST.
    """
    path = method.http_path or method_name_to_path(method.name)
    verb = method.http_method.upper() or DEFAULT_VERB
    return Routing(
        verb=verb,
        path=path,
        path_params=tuple(extract_path_parameters(path)),
        body_field=method.http_body,
    )


def synthesize_path_parameters(path_params, declared) -> list[Parameter]:
    """Build required string parameters for path parameters not in ``declared``."""
    parameters = []
    for name in path_params:
        if name in declared:
            continue
        parameters.append(
            Parameter(
                name=name,
                in_='path',
                description=f'Path parameter {name}',
                required=True,
                schema_=Schema(type=SchemaType.string),
            )
        )
    return parameters


def build_query_parameters(
    message: ParsedMessage,
    routing: Routing,
    resolver: SchemaResolver,
    exclude=(),
) -> list[Parameter]:
    """Build query parameters from the input message fields.

    Fields bound to the path, the body field and names in ``exclude`` are
    skipped. When the whole message is the body there are no query parameters.
    """
    if routing.body_field == WHOLE_MESSAGE_BODY:
        return []

    skipped = set(routing.path_params) | set(exclude)
    if routing.body_field:
        skipped.add(routing.body_field)

    parameters = []
    for field in message.fields:
        if field.name in skipped:
            continue

        parameter = Parameter(
            name=field.name,
            in_='query',
            description=field.comment.strip() or f'Query parameter {field.name}',
            required=not field.is_optional,
        )
        if isinstance(field.type, RepeatedType):
            parameter.schema_ = Schema(
                type=SchemaType.array, items=resolver.resolve_type(field.type.item)
            )
            parameter.style = 'form'
            parameter.explode = True
        else:
            parameter.schema_ = resolver.resolve_field(field)
        parameters.append(parameter)
    return parameters
