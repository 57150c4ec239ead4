"""Custom exceptions for protoc-gen-openapiv3.

This module defines the hierarchy of exceptions raised by the plugin. The
conversion engine itself only ever raises InputContractError; every other
anomaly, such as an unresolvable type or a duplicate route, is
absorbed into best-effort output. The remaining exceptions belong to the
layers around the engine: descriptor extraction, loading, configuration and
output writing.
"""


class ProtoOpenAPIError(Exception):
    """Base exception for all protoc-gen-openapiv3 errors.

    Example:
        try:
            document = convert_to_openapi(parsed_file)
        except ProtoOpenAPIError as e:
            print(f"conversion failed: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class InputContractError(ProtoOpenAPIError):
    """The parsed input violates the converter's input contract.

    Raised for a missing or empty ParsedFile, and for two types that would
    share one component name.

    Attributes:
        reason: Explanation of the violated contract.
        names: The offending type names, if any.
    """

    def __init__(self, reason: str, names: list[str] | None = None):
        self.reason = reason
        self.names = names or []
        message = reason
        if names:
            message += f': {", ".join(names)}'
        super().__init__(message)


class DescriptorError(ProtoOpenAPIError):
    """A protobuf descriptor could not be turned into a ParsedFile.

    Attributes:
        file_name: The .proto file being processed.
        element: The descriptor element that failed, if known.
    """

    def __init__(self, file_name: str, element: str | None = None, cause: Exception | None = None):
        self.file_name = file_name
        self.element = element
        self.cause = cause
        message = f"Failed to parse descriptor '{file_name}'"
        if element:
            message += f' (while parsing {element})'
        if cause:
            message += f': {cause}'
        super().__init__(message)


class DescriptionLoadError(ProtoOpenAPIError):
    """Failed to load a service description from a source.

    Attributes:
        source: Path or URL of the description file.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load description from '{source}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class ConfigurationError(ProtoOpenAPIError):
    """Invalid generator options.

    Attributes:
        config_path: The config file the value came from, if any.
        field: The GeneratorOptions field that failed validation.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class OutputError(ProtoOpenAPIError):
    """Error writing the generated document.

    Attributes:
        output_path: Destination of the OpenAPI document.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, output_path: str, cause: Exception | None = None):
        self.output_path = output_path
        self.cause = cause
        message = f"Failed to write output to '{output_path}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class UnsupportedFeatureError(ProtoOpenAPIError):
    """A requested option the generator cannot honour, such as an unknown output format.

    Attributes:
        feature: What was requested.
        suggestion: Supported alternative, appended to the message.
    """

    def __init__(self, feature: str, suggestion: str | None = None):
        self.feature = feature
        self.suggestion = suggestion
        message = f'Unsupported feature: {feature}'
        if suggestion:
            message += f'. {suggestion}'
        super().__init__(message)
