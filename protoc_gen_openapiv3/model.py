"""Parsed service description consumed by the converter.

The descriptor front end (or the YAML/JSON loader) builds one ParsedFile per
conversion. Field types are decided once, at construction time, as one of four
variants: ScalarType, RepeatedType, OptionalType or MapType. The textual
forms ``repeated T``, ``optional T`` and ``map<K, V>`` are accepted wherever a
field type is validated from raw data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from protoc_gen_openapiv3 import options

__all__ = [
    'FieldType',
    'MapType',
    'OptionalType',
    'ParsedEnum',
    'ParsedEnumValue',
    'ParsedField',
    'ParsedFile',
    'ParsedMessage',
    'ParsedMethod',
    'ParsedService',
    'RepeatedType',
    'ScalarType',
    'merge_parsed_files',
    'parse_type_descriptor',
    'strip_package',
]

REPEATED_PREFIX = 'repeated '
OPTIONAL_PREFIX = 'optional '
MAP_PREFIX = 'map<'


@dataclass(frozen=True)
class ScalarType:
    """A bare type name: a primitive, a message or an enum."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class RepeatedType:
    """Zero or more values of ``item``, in order."""

    item: str

    def __str__(self) -> str:
        return f'{REPEATED_PREFIX}{self.item}'


@dataclass(frozen=True)
class OptionalType:
    """Zero or one value of ``inner``."""

    inner: str

    def __str__(self) -> str:
        return f'{OPTIONAL_PREFIX}{self.inner}'


@dataclass(frozen=True)
class MapType:
    """A map from ``key`` to ``value``.

    Both are None when the map syntax could not be parsed.
    """

    key: str | None
    value: str | None

    @property
    def is_malformed(self) -> bool:
        return self.key is None or self.value is None

    def __str__(self) -> str:
        if self.is_malformed:
            return 'map<>'
        return f'map<{self.key}, {self.value}>'


FieldType = Union[ScalarType, RepeatedType, OptionalType, MapType]


def parse_type_descriptor(descriptor: str) -> FieldType:
    """Parse a textual field type into its variant.

    >>> parse_type_descriptor('repeated string')
    RepeatedType(item='string')
    >>> parse_type_descriptor('map<string, User>')
    MapType(key='string', value='User')
    """
    descriptor = descriptor.strip()
    if descriptor.startswith(REPEATED_PREFIX):
        return RepeatedType(descriptor[len(REPEATED_PREFIX):].strip())
    if descriptor.startswith(OPTIONAL_PREFIX):
        return OptionalType(descriptor[len(OPTIONAL_PREFIX):].strip())
    if descriptor.startswith(MAP_PREFIX):
        inner = descriptor[len(MAP_PREFIX):]
        if inner.endswith('>'):
            inner = inner[:-1]
        parts = [part.strip() for part in inner.split(',')]
        if len(parts) != 2 or not all(parts):
            return MapType(None, None)
        return MapType(parts[0], parts[1])
    return ScalarType(descriptor)


def strip_package(name: str) -> str:
    """Drop any package qualification from a type name.

    >>> strip_package('google.protobuf.Timestamp')
    'Timestamp'
    """
    return name.rsplit('.', 1)[-1]


class _Parsed(BaseModel):
    model_config = ConfigDict(extra='forbid', arbitrary_types_allowed=True)


class ParsedField(_Parsed):
    name: str
    type: FieldType
    number: int = 0
    comment: str = ''

    @field_validator('type', mode='before')
    @classmethod
    def _parse_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_type_descriptor(value)
        return value

    @property
    def is_optional(self) -> bool:
        return isinstance(self.type, OptionalType)


class ParsedMessage(_Parsed):
    name: str
    fields: list[ParsedField] = Field(default_factory=list)
    comment: str = ''


class ParsedEnumValue(_Parsed):
    name: str
    number: int = 0
    comment: str = ''


class ParsedEnum(_Parsed):
    name: str
    values: list[ParsedEnumValue] = Field(default_factory=list)
    comment: str = ''


class ParsedMethod(_Parsed):
    """A service method with its HTTP routing and annotations.

    ``http_method`` and ``http_path`` are empty when the method carries no
    HTTP binding; the converter then derives a route from the method name.
    """

    name: str
    input_type: str
    output_type: str
    comment: str = ''
    http_method: str = ''
    http_path: str = ''
    http_body: str = ''
    operation: options.Operation | None = None


class ParsedService(_Parsed):
    name: str
    methods: list[ParsedMethod] = Field(default_factory=list)
    comment: str = ''


class ParsedFile(_Parsed):
    """Root unit of conversion input.

    ``legacy_swagger`` holds v2 style annotations; they are upgraded into the
    v3 fields by :func:`protoc_gen_openapiv3.compat.upgrade_legacy_annotations`.
    """

    package: str = ''
    services: list[ParsedService] = Field(default_factory=list)
    messages: list[ParsedMessage] = Field(default_factory=list)
    enums: list[ParsedEnum] = Field(default_factory=list)
    imports: list[str] = Field(default_factory=list)
    info: options.Info | None = None
    servers: list[options.Server] = Field(default_factory=list)
    security_schemes: list[options.SecurityScheme] = Field(default_factory=list)
    security: list[options.SecurityRequirement] = Field(default_factory=list)
    tags: list[options.Tag] = Field(default_factory=list)
    legacy_swagger: dict[str, Any] | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.services or self.messages or self.enums)


def merge_parsed_files(files: list[ParsedFile]) -> ParsedFile:
    """Combine several files into one, for single-document output.

    Declarations are concatenated in file order. Document-level annotations
    (info, servers, security schemes, security, tags) come from the first file
    that declares them.
    """
    if not files:
        return ParsedFile()

    def first(attribute: str):
        for parsed in files:
            value = getattr(parsed, attribute)
            if value:
                return value
        return getattr(files[0], attribute)

    imports = []
    for parsed in files:
        for name in parsed.imports:
            if name not in imports:
                imports.append(name)

    return ParsedFile(
        package=files[0].package,
        services=[service for parsed in files for service in parsed.services],
        messages=[message for parsed in files for message in parsed.messages],
        enums=[enum for parsed in files for enum in parsed.enums],
        imports=imports,
        info=first('info'),
        servers=first('servers'),
        security_schemes=first('security_schemes'),
        security=first('security'),
        tags=first('tags'),
        legacy_swagger=first('legacy_swagger'),
    )
