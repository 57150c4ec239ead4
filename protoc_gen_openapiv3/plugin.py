"""The protoc plugin entry point.

protoc runs ``protoc-gen-openapiv3`` with a serialized CodeGeneratorRequest on
stdin and reads a CodeGeneratorResponse from stdout. Errors are reported in
the response rather than raised, so stdout must carry nothing else; logging
goes to stderr.
"""

import logging
import sys

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from protoc_gen_openapiv3.config import GeneratorOptions, get_config, parse_plugin_parameter
from protoc_gen_openapiv3.converter import DocumentAssembler
from protoc_gen_openapiv3.descriptors import parse_descriptor_set
from protoc_gen_openapiv3.exceptions import ProtoOpenAPIError
from protoc_gen_openapiv3.model import merge_parsed_files
from protoc_gen_openapiv3.writer import DocumentWriter

logger = logging.getLogger(__name__)


def generate_files(
    request: plugin_pb2.CodeGeneratorRequest, options: GeneratorOptions
) -> list[plugin_pb2.CodeGeneratorResponse.File]:
    """Generate one document per requested file, or one merged document."""
    file_names = list(request.file_to_generate)
    descriptor_set = descriptor_pb2.FileDescriptorSet()
    descriptor_set.file.extend(request.proto_file)
    parsed_files = parse_descriptor_set(descriptor_set, file_names)

    assembler = DocumentAssembler(options)
    writer = DocumentWriter(options.output_format)

    if options.allow_merge:
        document = assembler.convert(merge_parsed_files(parsed_files))
        return [
            plugin_pb2.CodeGeneratorResponse.File(
                name=options.output_file, content=writer.serialize(document)
            )
        ]

    generated = []
    for name, parsed in zip(file_names, parsed_files):
        if parsed.is_empty:
            logger.info(f'Skipping {name}: no services, messages or enums')
            continue
        document = assembler.convert(parsed)
        generated.append(
            plugin_pb2.CodeGeneratorResponse.File(
                name=writer.output_name(name), content=writer.serialize(document)
            )
        )
    return generated


def run(
    request: plugin_pb2.CodeGeneratorRequest, base: GeneratorOptions | None = None
) -> plugin_pb2.CodeGeneratorResponse:
    """Handle one CodeGeneratorRequest."""
    response = plugin_pb2.CodeGeneratorResponse(
        supported_features=plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL
    )
    try:
        options = parse_plugin_parameter(request.parameter, base or get_config())
        response.file.extend(generate_files(request, options))
    except ProtoOpenAPIError as e:
        response.error = e.message
    return response


def main() -> None:
    logging.basicConfig(stream=sys.stderr, level=logging.WARNING, format='%(name)s: %(message)s')

    request = plugin_pb2.CodeGeneratorRequest()
    request.ParseFromString(sys.stdin.buffer.read())

    response = run(request)

    sys.stdout.buffer.write(response.SerializeToString())
    sys.stdout.buffer.flush()


if __name__ == '__main__':
    main()
