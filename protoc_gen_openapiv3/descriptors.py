"""Descriptor front end.

Turns ``google.protobuf`` FileDescriptorProto messages, as found in a protoc
CodeGeneratorRequest or a serialized FileDescriptorSet, into ParsedFile
instances. Nested messages and enums are flattened into the file, map entry
types are folded into ``map<K, V>`` fields and ``google.api.http`` rules
become the method routing. Leading comments come from ``source_code_info``.
"""

import logging

# Importing annotations_pb2 registers the google.api.http extension, which must
# happen before descriptors carrying it are parsed.
from google.api import annotations_pb2
from google.protobuf import descriptor_pb2

from protoc_gen_openapiv3.exceptions import DescriptorError
from protoc_gen_openapiv3.model import (
    MapType,
    OptionalType,
    ParsedEnum,
    ParsedEnumValue,
    ParsedField,
    ParsedFile,
    ParsedMessage,
    ParsedMethod,
    ParsedService,
    RepeatedType,
    ScalarType,
)

logger = logging.getLogger(__name__)

FieldDescriptorProto = descriptor_pb2.FieldDescriptorProto

# Field numbers inside descriptor.proto, used as source_code_info paths
FILE_MESSAGE_TYPE = 4
FILE_ENUM_TYPE = 5
FILE_SERVICE = 6
MESSAGE_FIELD = 2
MESSAGE_NESTED_TYPE = 3
MESSAGE_ENUM_TYPE = 4
ENUM_VALUE = 2
SERVICE_METHOD = 2

SCALAR_TYPES = {
    FieldDescriptorProto.TYPE_DOUBLE: 'double',
    FieldDescriptorProto.TYPE_FLOAT: 'float',
    FieldDescriptorProto.TYPE_INT64: 'int64',
    FieldDescriptorProto.TYPE_UINT64: 'uint64',
    FieldDescriptorProto.TYPE_INT32: 'int32',
    FieldDescriptorProto.TYPE_FIXED64: 'uint64',
    FieldDescriptorProto.TYPE_FIXED32: 'uint32',
    FieldDescriptorProto.TYPE_BOOL: 'bool',
    FieldDescriptorProto.TYPE_STRING: 'string',
    FieldDescriptorProto.TYPE_BYTES: 'bytes',
    FieldDescriptorProto.TYPE_UINT32: 'uint32',
    FieldDescriptorProto.TYPE_SFIXED32: 'int32',
    FieldDescriptorProto.TYPE_SFIXED64: 'int64',
    FieldDescriptorProto.TYPE_SINT32: 'int32',
    FieldDescriptorProto.TYPE_SINT64: 'int64',
}


def clean_comment(comment: str) -> str:
    """Strip the per-line indentation protoc keeps in comments."""
    return '\n'.join(line.strip() for line in comment.strip().splitlines())


class DescriptorParser:
    """Parses one FileDescriptorProto into a ParsedFile.

    Example:
        >>> parsed = DescriptorParser(file_proto).parse()
        >>> [service.name for service in parsed.services]
        ['UserService']
    """

    def __init__(self, file_proto: descriptor_pb2.FileDescriptorProto):
        self.file_proto = file_proto
        self._comments: dict[tuple[int, ...], str] = {}
        self._map_entries: dict[str, descriptor_pb2.DescriptorProto] = {}
        self._messages: list[ParsedMessage] = []
        self._enums: list[ParsedEnum] = []

    def parse(self) -> ParsedFile:
        file_proto = self.file_proto
        self._index_comments()

        prefix = f'.{file_proto.package}' if file_proto.package else ''
        for message in file_proto.message_type:
            self._index_map_entries(message, prefix)
        for index, message in enumerate(file_proto.message_type):
            self._parse_message(message, (FILE_MESSAGE_TYPE, index))
        for index, enum in enumerate(file_proto.enum_type):
            self._enums.append(self._parse_enum(enum, (FILE_ENUM_TYPE, index)))

        services = [
            self._parse_service(service, (FILE_SERVICE, index))
            for index, service in enumerate(file_proto.service)
        ]

        return ParsedFile(
            package=file_proto.package,
            services=services,
            messages=self._messages,
            enums=self._enums,
            imports=list(file_proto.dependency),
        )

    def _index_comments(self) -> None:
        for location in self.file_proto.source_code_info.location:
            comment = location.leading_comments or location.trailing_comments
            if comment:
                self._comments[tuple(location.path)] = clean_comment(comment)

    def _comment(self, path: tuple[int, ...]) -> str:
        return self._comments.get(path, '')

    def _index_map_entries(self, message: descriptor_pb2.DescriptorProto, scope: str) -> None:
        full_name = f'{scope}.{message.name}'
        if message.options.map_entry:
            self._map_entries[full_name] = message
        for nested in message.nested_type:
            self._index_map_entries(nested, full_name)

    def _parse_message(self, message: descriptor_pb2.DescriptorProto, path: tuple[int, ...]) -> None:
        if message.options.map_entry:
            return

        fields = [
            self._parse_field(message, field, path + (MESSAGE_FIELD, index))
            for index, field in enumerate(message.field)
        ]
        self._messages.append(
            ParsedMessage(name=message.name, fields=fields, comment=self._comment(path))
        )

        for index, nested in enumerate(message.nested_type):
            self._parse_message(nested, path + (MESSAGE_NESTED_TYPE, index))
        for index, enum in enumerate(message.enum_type):
            self._enums.append(self._parse_enum(enum, path + (MESSAGE_ENUM_TYPE, index)))

    def _type_name(self, message, field: descriptor_pb2.FieldDescriptorProto) -> str:
        if field.type in (FieldDescriptorProto.TYPE_MESSAGE, FieldDescriptorProto.TYPE_ENUM):
            return field.type_name.lstrip('.')
        scalar = SCALAR_TYPES.get(field.type)
        if scalar is None:
            raise DescriptorError(
                self.file_proto.name,
                element=f'field {message.name}.{field.name}',
                cause=ValueError(f'unsupported field type {field.type}'),
            )
        return scalar

    def _parse_field(self, message, field, path: tuple[int, ...]) -> ParsedField:
        map_entry = self._map_entries.get(field.type_name)
        if map_entry is not None:
            key, value = map_entry.field[0], map_entry.field[1]
            field_type = MapType(
                self._type_name(map_entry, key), self._type_name(map_entry, value)
            )
        elif field.label == FieldDescriptorProto.LABEL_REPEATED:
            field_type = RepeatedType(self._type_name(message, field))
        elif self._is_optional(field):
            field_type = OptionalType(self._type_name(message, field))
        else:
            field_type = ScalarType(self._type_name(message, field))

        return ParsedField(
            name=field.name,
            type=field_type,
            number=field.number,
            comment=self._comment(path),
        )

    def _is_optional(self, field: descriptor_pb2.FieldDescriptorProto) -> bool:
        if field.proto3_optional:
            return True
        # proto2 files have an empty syntax
        return (
            self.file_proto.syntax in ('', 'proto2')
            and field.label == FieldDescriptorProto.LABEL_OPTIONAL
        )

    def _parse_enum(self, enum: descriptor_pb2.EnumDescriptorProto, path: tuple[int, ...]) -> ParsedEnum:
        values = [
            ParsedEnumValue(
                name=value.name,
                number=value.number,
                comment=self._comment(path + (ENUM_VALUE, index)),
            )
            for index, value in enumerate(enum.value)
        ]
        return ParsedEnum(name=enum.name, values=values, comment=self._comment(path))

    def _parse_service(
        self, service: descriptor_pb2.ServiceDescriptorProto, path: tuple[int, ...]
    ) -> ParsedService:
        methods = [
            self._parse_method(method, path + (SERVICE_METHOD, index))
            for index, method in enumerate(service.method)
        ]
        return ParsedService(name=service.name, methods=methods, comment=self._comment(path))

    def _parse_method(
        self, method: descriptor_pb2.MethodDescriptorProto, path: tuple[int, ...]
    ) -> ParsedMethod:
        parsed = ParsedMethod(
            name=method.name,
            input_type=method.input_type.lstrip('.'),
            output_type=method.output_type.lstrip('.'),
            comment=self._comment(path),
        )

        if not method.options.HasExtension(annotations_pb2.http):
            return parsed

        rule = method.options.Extensions[annotations_pb2.http]
        pattern = rule.WhichOneof('pattern')
        if pattern == 'custom':
            parsed.http_method = rule.custom.kind.upper()
            parsed.http_path = rule.custom.path
        elif pattern is not None:
            parsed.http_method = pattern.upper()
            parsed.http_path = getattr(rule, pattern)
        parsed.http_body = rule.body

        if rule.additional_bindings:
            logger.warning(
                f'Ignoring {len(rule.additional_bindings)} additional HTTP binding(s) '
                f'of {method.name}'
            )
        return parsed


def parse_file_descriptor(file_proto: descriptor_pb2.FileDescriptorProto) -> ParsedFile:
    """Parse one file descriptor into a ParsedFile."""
    return DescriptorParser(file_proto).parse()


def parse_descriptor_set(
    descriptor_set: descriptor_pb2.FileDescriptorSet,
    file_names: list[str] | None = None,
) -> list[ParsedFile]:
    """Parse the files of a descriptor set.

    Args:
        descriptor_set: The descriptor set to parse.
        file_names: Only parse these files, in this order. All files are parsed
            when omitted.
    """
    files = {file_proto.name: file_proto for file_proto in descriptor_set.file}
    if file_names is None:
        file_names = list(files)

    parsed = []
    for name in file_names:
        if name not in files:
            raise DescriptorError(name, cause=KeyError('file not found in descriptor set'))
        parsed.append(parse_file_descriptor(files[name]))
    return parsed
