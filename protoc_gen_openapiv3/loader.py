"""Loading of service descriptions.

This module provides the DescriptionLoader class, which reads ParsedFile
descriptions from YAML or JSON (a local file or an HTTP URL) and from binary
FileDescriptorSet files produced by ``protoc --descriptor_set_out``.
"""

import json
import logging
from pathlib import Path
from urllib.parse import urlparse

import httpx
import yaml
from google.protobuf import descriptor_pb2
from google.protobuf.message import DecodeError
from pydantic import ValidationError

from protoc_gen_openapiv3.descriptors import parse_descriptor_set
from protoc_gen_openapiv3.exceptions import DescriptionLoadError
from protoc_gen_openapiv3.model import ParsedFile

logger = logging.getLogger(__name__)

DESCRIPTOR_SET_SUFFIXES = ('.pb', '.binpb', '.desc')


class DescriptionLoader:
    """Loads ParsedFile descriptions from URLs or file paths.

    A YAML/JSON description holds either one file at the top level or a list
    of them under ``files``. A descriptor set yields one ParsedFile per
    ``.proto`` file it contains.

    Example:
        >>> loader = DescriptionLoader()
        >>> files = loader.load('./user_service.yaml')
        >>> # or
        >>> files = loader.load('https://example.com/descriptors.binpb')
    """

    def __init__(self, http_client: httpx.Client | None = None):
        """Initialize the loader.

        Args:
            http_client: Optional HTTP client to use for URL requests.
                        If not provided, ``httpx.get`` is used.
        """
        self._http_client = http_client

    def load(self, source: str) -> list[ParsedFile]:
        """Load every ParsedFile described by ``source``.

        Raises:
            DescriptionLoadError: If the source cannot be read or parsed.
        """
        try:
            if self._is_url(source):
                content = self._load_from_url(source)
            else:
                content = self._load_from_file(source)

            if self._is_descriptor_set(source):
                return self._parse_descriptor_set(content, source)
            return self._parse_description(content, source)

        except DescriptionLoadError:
            raise
        except Exception as e:
            raise DescriptionLoadError(source, cause=e)

    def load_one(self, source: str) -> ParsedFile:
        """Load a source that must describe exactly one file."""
        files = self.load(source)
        if len(files) != 1:
            raise DescriptionLoadError(
                source, cause=ValueError(f'expected one file, found {len(files)}')
            )
        return files[0]

    def _is_url(self, text: str) -> bool:
        """Check if a string is a URL."""
        try:
            result = urlparse(text)
            return result.scheme in ('http', 'https')
        except ValueError:
            return False

    def _is_descriptor_set(self, source: str) -> bool:
        path = urlparse(source).path if self._is_url(source) else source
        return path.lower().endswith(DESCRIPTOR_SET_SUFFIXES)

    def _load_from_url(self, url: str) -> bytes:
        """Load raw content from a URL."""
        try:
            if self._http_client:
                response = self._http_client.get(url)
            else:
                response = httpx.get(url, follow_redirects=True, timeout=30.0)

            response.raise_for_status()
            return response.content

        except httpx.HTTPError as e:
            raise DescriptionLoadError(url, cause=e)

    def _load_from_file(self, file_path: str) -> bytes:
        """Load raw content from a file."""
        path = Path(file_path)
        if not path.exists():
            raise DescriptionLoadError(
                file_path, cause=FileNotFoundError(f'File not found: {path}')
            )

        try:
            return path.read_bytes()
        except OSError as e:
            raise DescriptionLoadError(file_path, cause=e)

    def _parse_descriptor_set(self, content: bytes, source: str) -> list[ParsedFile]:
        descriptor_set = descriptor_pb2.FileDescriptorSet()
        try:
            descriptor_set.ParseFromString(content)
        except DecodeError as e:
            raise DescriptionLoadError(source, cause=e)
        logger.debug(f'Loaded descriptor set with {len(descriptor_set.file)} file(s)')
        return parse_descriptor_set(descriptor_set)

    def _parse_description(self, content: bytes, source: str) -> list[ParsedFile]:
        text = content.decode('utf-8')
        try:
            if source.lower().endswith('.json'):
                data = json.loads(text)
            else:
                # YAML is a superset of JSON
                data = yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise DescriptionLoadError(source, cause=e)

        if not isinstance(data, dict):
            raise DescriptionLoadError(
                source, cause=ValueError('description must be a mapping')
            )

        entries = data['files'] if 'files' in data else [data]
        try:
            return [ParsedFile.model_validate(entry) for entry in entries]
        except ValidationError as e:
            raise DescriptionLoadError(source, cause=e)
