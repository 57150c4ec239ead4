"""Test fixtures for protoc-gen-openapiv3 tests.

This module provides sample service descriptions, in the shape the
DescriptionLoader reads from YAML or JSON, for testing the conversion.
"""

# A user CRUD service with a mix of explicit and derived routing
USER_SERVICE_FILE = {
    'package': 'test.package',
    'services': [
        {
            'name': 'UserService',
            'comment': 'Manages users.',
            'methods': [
                {
                    'name': 'GetUser',
                    'input_type': 'test.package.GetUserRequest',
                    'output_type': 'test.package.User',
                    'comment': ' Get a user.\n Looks a user up by id.\n',
                    'http_method': 'GET',
                    'http_path': '/v1/users/{user_id}',
                },
                {
                    'name': 'CreateUser',
                    'input_type': 'test.package.CreateUserRequest',
                    'output_type': 'test.package.User',
                    'comment': 'Create a user.',
                    'http_method': 'POST',
                    'http_path': '/v1/users',
                    'http_body': 'user',
                },
                {
                    'name': 'UpdateUser',
                    'input_type': 'test.package.UpdateUserRequest',
                    'output_type': 'test.package.User',
                    'http_method': 'PUT',
                    'http_path': '/v1/users/{user.user_id}',
                    'http_body': '*',
                },
                {
                    'name': 'PatchUser',
                    'input_type': 'test.package.UpdateUserRequest',
                    'output_type': 'test.package.User',
                    'http_method': 'PATCH',
                    'http_path': '/v1/users/{user_id}',
                    'http_body': 'user',
                },
                {
                    'name': 'DeleteUser',
                    'input_type': 'test.package.DeleteUserRequest',
                    'output_type': 'google.protobuf.Empty',
                    'http_method': 'DELETE',
                    'http_path': '/v1/users/{user_id}',
                },
            ],
        }
    ],
    'messages': [
        {
            'name': 'User',
            'comment': 'A registered user.',
            'fields': [
                {'name': 'user_id', 'type': 'string', 'number': 1},
                {'name': 'email', 'type': 'string', 'number': 2},
            ],
        },
        {
            'name': 'GetUserRequest',
            'fields': [{'name': 'user_id', 'type': 'string', 'number': 1}],
        },
        {
            'name': 'CreateUserRequest',
            'fields': [
                {'name': 'user', 'type': 'test.package.User', 'number': 1},
                {'name': 'request_id', 'type': 'optional string', 'number': 2},
            ],
        },
        {
            'name': 'UpdateUserRequest',
            'fields': [
                {'name': 'user', 'type': 'test.package.User', 'number': 1},
                {'name': 'update_mask', 'type': 'repeated string', 'number': 2},
            ],
        },
        {
            'name': 'DeleteUserRequest',
            'fields': [{'name': 'user_id', 'type': 'string', 'number': 1}],
        },
    ],
    'enums': [
        {
            'name': 'UserStatus',
            'comment': 'Lifecycle state of a user.',
            'values': [
                {'name': 'USER_STATUS_UNSPECIFIED', 'number': 0},
                {'name': 'USER_STATUS_ACTIVE', 'number': 1},
            ],
        }
    ],
}

# A method without HTTP routing
UNANNOTATED_SERVICE_FILE = {
    'package': 'echo.v1',
    'services': [
        {
            'name': 'EchoService',
            'methods': [
                {
                    'name': 'EchoMessage',
                    'input_type': 'echo.v1.EchoRequest',
                    'output_type': 'echo.v1.EchoResponse',
                    'comment': 'Echo a message back.',
                },
            ],
        }
    ],
    'messages': [
        {
            'name': 'EchoRequest',
            'fields': [
                {'name': 'text', 'type': 'string'},
                {'name': 'repeat', 'type': 'optional int32'},
            ],
        },
        {
            'name': 'EchoResponse',
            'fields': [{'name': 'texts', 'type': 'repeated string'}],
        },
    ],
}

# Messages referencing each other and themselves
CYCLIC_MESSAGES_FILE = {
    'package': 'graph',
    'messages': [
        {
            'name': 'Node',
            'comment': 'A tree node.',
            'fields': [
                {'name': 'name', 'type': 'string'},
                {'name': 'children', 'type': 'repeated graph.Node'},
                {'name': 'parent', 'type': 'optional graph.Node'},
            ],
        },
        {'name': 'A', 'fields': [{'name': 'b', 'type': 'graph.B'}]},
        {'name': 'B', 'fields': [{'name': 'a', 'type': 'graph.A'}]},
    ],
}

# Every field type variant
FIELD_VARIANTS_FILE = {
    'package': 'variants',
    'messages': [
        {
            'name': 'Everything',
            'fields': [
                {'name': 'id', 'type': 'int64', 'comment': 'Identifier.'},
                {'name': 'ratio', 'type': 'double'},
                {'name': 'active', 'type': 'bool'},
                {'name': 'payload', 'type': 'bytes'},
                {'name': 'created_at', 'type': 'google.protobuf.Timestamp'},
                {'name': 'nothing', 'type': 'google.protobuf.Empty'},
                {'name': 'labels', 'type': 'map<string, string>', 'comment': 'Free-form labels.'},
                {'name': 'children', 'type': 'map<string, variants.Child>'},
                {'name': 'broken', 'type': 'map<string>', 'comment': 'Malformed.'},
                {'name': 'tags', 'type': 'repeated string', 'comment': 'Tags.'},
                {'name': 'nickname', 'type': 'optional string', 'comment': 'Nickname.'},
                {'name': 'color', 'type': 'variants.Color'},
                {'name': 'missing', 'type': 'other.pkg.Missing'},
            ],
        },
        {'name': 'Child', 'fields': [{'name': 'name', 'type': 'string'}]},
    ],
    'enums': [
        {
            'name': 'Color',
            'values': [
                {'name': 'COLOR_UNSPECIFIED', 'number': 0},
                {'name': 'RED', 'number': 1},
                {'name': 'GREEN', 'number': 2},
            ],
        }
    ],
}

# A method carrying a full operation annotation, plus document annotations
ANNOTATED_SERVICE_FILE = {
    'package': 'library.v1',
    'info': {
        'title': 'Library API',
        'description': 'Books and shelves.',
        'version': '2.3.0',
        'contact': {'name': 'Library Team', 'email': 'team@example.com'},
        'license': {'name': 'Apache 2.0', 'url': 'https://www.apache.org/licenses/LICENSE-2.0'},
    },
    'servers': [
        {
            'url': 'https://{region}.example.com',
            'description': 'Regional endpoint',
            'variables': {'region': {'default': 'eu', 'enum': ['eu', 'us']}},
        }
    ],
    'security_schemes': [
        {'type': 'http', 'name': 'bearerAuth', 'scheme': 'bearer', 'bearer_format': 'JWT'},
        {'type': 'apiKey', 'name': 'X-API-Key', 'in': 'header'},
        {
            'type': 'oauth2',
            'name': 'oauth',
            'flows': {
                'authorization_code': {
                    'authorization_url': 'https://auth.example.com/authorize',
                    'token_url': 'https://auth.example.com/token',
                    'scopes': [{'name': 'books.read', 'description': 'Read books'}],
                }
            },
        },
        {'type': 'mutualTLS', 'name': 'mtls'},
    ],
    'security': [{'name': 'bearerAuth'}],
    'tags': [
        {
            'name': 'BookService',
            'description': 'Book operations',
            'external_docs': {'url': 'https://docs.example.com/books'},
        }
    ],
    'services': [
        {
            'name': 'BookService',
            'methods': [
                {
                    'name': 'SearchBooks',
                    'input_type': 'library.v1.SearchBooksRequest',
                    'output_type': 'library.v1.SearchBooksResponse',
                    'comment': 'Search books.',
                    'http_method': 'POST',
                    'http_path': '/v1/shelves/{shelf}/books:search',
                    'operation': {
                        'summary': 'Search the shelf',
                        'deprecated': True,
                        'external_docs': {
                            'description': 'Search guide',
                            'url': 'https://docs.example.com/search',
                        },
                        'parameters': [
                            {
                                'name': 'shelf',
                                'in': 'path',
                                'description': 'Shelf identifier',
                                'schema': {'type': 'string', 'pattern': '^[a-z]+$'},
                            },
                            {
                                'name': 'X-Request-Id',
                                'in': 'header',
                                'schema': {'type': 'string', 'format': 'uuid'},
                            },
                        ],
                        'request_body': {
                            'description': 'Search filter',
                            'required': True,
                            'content': {
                                'application/json': {
                                    'schema': {'ref': '#/components/schemas/Filter'},
                                    'examples': {
                                        'simple': {'summary': 'By author', 'value': '{"author": "Le Guin"}'}
                                    },
                                },
                                'multipart/form-data': {
                                    'schema': {
                                        'type': 'object',
                                        'properties': {'file': {'type': 'string', 'format': 'binary'}},
                                    },
                                    'encoding': {'file': {'content_type': 'application/pdf'}},
                                },
                            },
                        },
                        'responses': [
                            {
                                'code': '200',
                                'description': 'Matching books',
                                'content': {
                                    'application/json': {
                                        'schema': {'ref': '#/definitions/SearchBooksResponse'}
                                    }
                                },
                                'headers': {
                                    'X-Total-Count': {
                                        'description': 'Number of matches',
                                        'schema': {'type': 'integer', 'minimum': 1},
                                    }
                                },
                                'links': {
                                    'GetBook': {
                                        'operation_id': 'GetBook',
                                        'parameters': {'book': '$response.body#/books/0/name'},
                                    }
                                },
                            },
                            {'code': '404', 'description': 'Shelf not found'},
                        ],
                        'security': [{'name': 'oauth', 'scopes': ['books.read']}],
                    },
                },
            ],
        }
    ],
    'messages': [
        {
            'name': 'SearchBooksRequest',
            'fields': [
                {'name': 'shelf', 'type': 'string'},
                {'name': 'filter', 'type': 'library.v1.Filter'},
            ],
        },
        {
            'name': 'SearchBooksResponse',
            'fields': [{'name': 'books', 'type': 'repeated library.v1.Book'}],
        },
        {'name': 'Filter', 'fields': [{'name': 'author', 'type': 'optional string'}]},
        {'name': 'Book', 'fields': [{'name': 'name', 'type': 'string'}]},
    ],
}

# Annotations in the legacy OpenAPI v2 form
LEGACY_SWAGGER = {
    'info': {
        'title': 'Legacy API',
        'version': '0.9.0',
        'contact': {'name': 'Ops', 'url': 'https://ops.example.com'},
        'license': {'name': 'MIT'},
    },
    'host': 'legacy.example.com',
    'base_path': '/api',
    'schemes': ['HTTP'],
    'security_definitions': {
        'security': {
            'basic': {'type': 'TYPE_BASIC', 'description': 'Basic auth'},
            'key': {'type': 'TYPE_API_KEY', 'name': 'X-Key', 'in': 'IN_HEADER'},
            'oauth': {
                'type': 'TYPE_OAUTH2',
                'flow': 'FLOW_ACCESS_CODE',
                'authorization_url': 'https://auth.example.com/authorize',
                'token_url': 'https://auth.example.com/token',
                'scopes': {'scope': {'read': 'Read access'}},
            },
        }
    },
    'security': [{'security_requirement': {'basic': {'scope': []}}}],
    'tags': [
        {
            'name': 'Legacy',
            'description': 'Old endpoints',
            'external_docs': {'description': 'Docs', 'url': 'https://docs.example.com'},
        }
    ],
}
