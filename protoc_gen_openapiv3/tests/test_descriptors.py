"""Tests for parsing protobuf descriptors."""

import logging

import pytest
from google.api import annotations_pb2
from google.protobuf import descriptor_pb2

from protoc_gen_openapiv3.descriptors import (
    DescriptorParser,
    clean_comment,
    parse_descriptor_set,
    parse_file_descriptor,
)
from protoc_gen_openapiv3.exceptions import DescriptorError
from protoc_gen_openapiv3.model import MapType, OptionalType, RepeatedType, ScalarType

FieldDescriptorProto = descriptor_pb2.FieldDescriptorProto


def add_field(message, name, number, field_type, label=FieldDescriptorProto.LABEL_OPTIONAL, **kwargs):
    return message.field.add(name=name, number=number, type=field_type, label=label, **kwargs)


@pytest.fixture
def user_proto():
    """A proto3 file with nested types, a map, an optional field and HTTP rules."""
    file_proto = descriptor_pb2.FileDescriptorProto(
        name='test/user.proto',
        package='test.package',
        syntax='proto3',
        dependency=['google/api/annotations.proto'],
    )

    user = file_proto.message_type.add(name='User')
    add_field(user, 'user_id', 1, FieldDescriptorProto.TYPE_STRING)
    add_field(
        user,
        'labels',
        2,
        FieldDescriptorProto.TYPE_MESSAGE,
        label=FieldDescriptorProto.LABEL_REPEATED,
        type_name='.test.package.User.LabelsEntry',
    )
    add_field(user, 'nickname', 3, FieldDescriptorProto.TYPE_STRING, proto3_optional=True, oneof_index=0)
    add_field(
        user, 'tags', 4, FieldDescriptorProto.TYPE_STRING, label=FieldDescriptorProto.LABEL_REPEATED
    )
    add_field(user, 'status', 5, FieldDescriptorProto.TYPE_ENUM, type_name='.test.package.User.Status')
    add_field(user, 'address', 6, FieldDescriptorProto.TYPE_MESSAGE, type_name='.test.package.User.Address')
    add_field(user, 'version', 7, FieldDescriptorProto.TYPE_FIXED64)
    user.oneof_decl.add(name='_nickname')

    entry = user.nested_type.add(name='LabelsEntry')
    entry.options.map_entry = True
    add_field(entry, 'key', 1, FieldDescriptorProto.TYPE_STRING)
    add_field(entry, 'value', 2, FieldDescriptorProto.TYPE_INT32)

    address = user.nested_type.add(name='Address')
    add_field(address, 'city', 1, FieldDescriptorProto.TYPE_STRING)

    status = user.enum_type.add(name='Status')
    status.value.add(name='STATUS_UNSPECIFIED', number=0)
    status.value.add(name='STATUS_ACTIVE', number=1)

    request = file_proto.message_type.add(name='GetUserRequest')
    add_field(request, 'user_id', 1, FieldDescriptorProto.TYPE_STRING)

    service = file_proto.service.add(name='UserService')
    get_user = service.method.add(
        name='GetUser', input_type='.test.package.GetUserRequest', output_type='.test.package.User'
    )
    get_user.options.Extensions[annotations_pb2.http].get = '/v1/users/{user_id}'

    update_user = service.method.add(
        name='UpdateUser', input_type='.test.package.User', output_type='.test.package.User'
    )
    rule = update_user.options.Extensions[annotations_pb2.http]
    rule.patch = '/v1/users/{user_id}'
    rule.body = '*'

    head_user = service.method.add(
        name='HeadUser', input_type='.test.package.GetUserRequest', output_type='.google.protobuf.Empty'
    )
    rule = head_user.options.Extensions[annotations_pb2.http]
    rule.custom.kind = 'head'
    rule.custom.path = '/v1/users/{user_id}'

    service.method.add(
        name='SyncUsers', input_type='.test.package.GetUserRequest', output_type='.test.package.User'
    )

    locations = file_proto.source_code_info.location
    locations.add(path=[4, 0], leading_comments=' A registered user.\n')
    locations.add(path=[4, 0, 2, 0], trailing_comments=' Unique identifier.\n')
    locations.add(path=[4, 0, 4, 0, 2, 1], leading_comments=' Account is usable.\n')
    locations.add(path=[6, 0], leading_comments=' Manages users.\n')
    locations.add(path=[6, 0, 2, 0], leading_comments=' Get a user.\n   Looks it up by id.\n')
    return file_proto


class TestCleanComment:
    """Tests for clean_comment."""

    def test_indentation_stripped(self):
        assert clean_comment(' First line.\n   Second line.\n') == 'First line.\nSecond line.'

    def test_empty(self):
        assert clean_comment('') == ''


class TestDescriptorParser:
    """Tests for DescriptorParser."""

    def test_file_level(self, user_proto):
        parsed = parse_file_descriptor(user_proto)

        assert parsed.package == 'test.package'
        assert parsed.imports == ['google/api/annotations.proto']

    def test_nested_types_flattened(self, user_proto):
        """Test that nested messages and enums join the file and map entries disappear."""
        parsed = DescriptorParser(user_proto).parse()

        assert [m.name for m in parsed.messages] == ['User', 'Address', 'GetUserRequest']
        assert [e.name for e in parsed.enums] == ['Status']

    def test_field_types(self, user_proto):
        parsed = parse_file_descriptor(user_proto)
        fields = {field.name: field.type for field in parsed.messages[0].fields}

        assert fields == {
            'user_id': ScalarType('string'),
            'labels': MapType('string', 'int32'),
            'nickname': OptionalType('string'),
            'tags': RepeatedType('string'),
            'status': ScalarType('test.package.User.Status'),
            'address': ScalarType('test.package.User.Address'),
            'version': ScalarType('uint64'),
        }

    def test_comments(self, user_proto):
        parsed = parse_file_descriptor(user_proto)

        assert parsed.messages[0].comment == 'A registered user.'
        assert parsed.messages[0].fields[0].comment == 'Unique identifier.'
        assert parsed.enums[0].values[1].comment == 'Account is usable.'
        assert parsed.services[0].comment == 'Manages users.'
        assert parsed.services[0].methods[0].comment == 'Get a user.\nLooks it up by id.'
        assert parsed.messages[1].comment == ''

    def test_http_rules(self, user_proto):
        methods = parse_file_descriptor(user_proto).services[0].methods

        assert [(m.name, m.http_method, m.http_path, m.http_body) for m in methods] == [
            ('GetUser', 'GET', '/v1/users/{user_id}', ''),
            ('UpdateUser', 'PATCH', '/v1/users/{user_id}', '*'),
            ('HeadUser', 'HEAD', '/v1/users/{user_id}', ''),
            ('SyncUsers', '', '', ''),
        ]

    def test_method_types_unqualified_by_dot(self, user_proto):
        method = parse_file_descriptor(user_proto).services[0].methods[2]

        assert method.input_type == 'test.package.GetUserRequest'
        assert method.output_type == 'google.protobuf.Empty'

    def test_additional_bindings_ignored(self, user_proto, caplog):
        rule = user_proto.service[0].method[0].options.Extensions[annotations_pb2.http]
        rule.additional_bindings.add(get='/v1/people/{user_id}')

        with caplog.at_level(logging.WARNING):
            method = parse_file_descriptor(user_proto).services[0].methods[0]

        assert method.http_path == '/v1/users/{user_id}'
        assert 'additional HTTP binding' in caplog.text

    def test_proto2_optional(self):
        file_proto = descriptor_pb2.FileDescriptorProto(name='legacy.proto', package='legacy')
        message = file_proto.message_type.add(name='Legacy')
        add_field(message, 'name', 1, FieldDescriptorProto.TYPE_STRING)
        add_field(
            message, 'id', 2, FieldDescriptorProto.TYPE_INT64, label=FieldDescriptorProto.LABEL_REQUIRED
        )

        fields = parse_file_descriptor(file_proto).messages[0].fields

        assert [f.type for f in fields] == [OptionalType('string'), ScalarType('int64')]

    def test_unsupported_field_type(self):
        file_proto = descriptor_pb2.FileDescriptorProto(
            name='groups.proto', package='groups', syntax='proto3'
        )
        message = file_proto.message_type.add(name='Old')
        add_field(message, 'group', 1, FieldDescriptorProto.TYPE_GROUP)

        with pytest.raises(DescriptorError) as excinfo:
            parse_file_descriptor(file_proto)

        assert excinfo.value.file_name == 'groups.proto'
        assert excinfo.value.element == 'field Old.group'


class TestParseDescriptorSet:
    """Tests for parse_descriptor_set."""

    @pytest.fixture
    def descriptor_set(self, user_proto):
        other = descriptor_pb2.FileDescriptorProto(name='other.proto', package='other')
        other.message_type.add(name='Other')
        return descriptor_pb2.FileDescriptorSet(file=[user_proto, other])

    def test_all_files(self, descriptor_set):
        parsed = parse_descriptor_set(descriptor_set)
        assert [p.package for p in parsed] == ['test.package', 'other']

    def test_selected_files_in_order(self, descriptor_set):
        parsed = parse_descriptor_set(descriptor_set, ['other.proto', 'test/user.proto'])
        assert [p.package for p in parsed] == ['other', 'test.package']

    def test_missing_file(self, descriptor_set):
        with pytest.raises(DescriptorError, match='missing.proto'):
            parse_descriptor_set(descriptor_set, ['missing.proto'])
