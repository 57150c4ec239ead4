"""Serialization and writing of generated documents."""

import json
from pathlib import Path

import yaml
from upath import UPath

from protoc_gen_openapiv3.exceptions import OutputError, UnsupportedFeatureError
from protoc_gen_openapiv3.openapi import OpenAPI

FORMAT_EXTENSIONS = {'yaml': 'yaml', 'json': 'json'}


class DocumentWriter:
    """Serializes OpenAPI documents to YAML or JSON and writes them to disk.

    Fields left unset or None are omitted, and keys keep the order in which the
    converter produced them.

    Example:
        >>> writer = DocumentWriter('json')
        >>> writer.write(document, Path('openapi.json'))
    """

    def __init__(self, output_format: str = 'yaml'):
        if output_format not in FORMAT_EXTENSIONS:
            raise UnsupportedFeatureError(
                f"output format '{output_format}'", 'Use yaml or json'
            )
        self.output_format = output_format

    @property
    def extension(self) -> str:
        return FORMAT_EXTENSIONS[self.output_format]

    @staticmethod
    def dump(document: OpenAPI) -> dict:
        """Convert a document to plain JSON-compatible data."""
        return document.model_dump(
            mode='json', by_alias=True, exclude_none=True, exclude_unset=True
        )

    def serialize(self, document: OpenAPI) -> str:
        data = self.dump(document)
        if self.output_format == 'json':
            return json.dumps(data, indent=2) + '\n'
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)

    def output_name(self, proto_name: str) -> str:
        """Name the document generated for a ``.proto`` file.

        >>> DocumentWriter('yaml').output_name('api/v1/user.proto')
        'api/v1/user.openapi.yaml'
        """
        stem = proto_name[: -len('.proto')] if proto_name.endswith('.proto') else proto_name
        return f'{stem}.openapi.{self.extension}'

    def write(self, document: OpenAPI, path: UPath | Path | str) -> None:
        """Serialize ``document`` and write it to ``path``.

        Raises:
            OutputError: If the file cannot be written.
        """
        path = UPath(path)
        try:
            content = self.serialize(document)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding='utf-8')
        except OSError as e:
            raise OutputError(str(path), cause=e)
