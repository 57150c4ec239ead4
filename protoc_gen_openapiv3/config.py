import os
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from protoc_gen_openapiv3 import options
from protoc_gen_openapiv3.exceptions import ConfigurationError
from protoc_gen_openapiv3.openapi.v3_1 import OPENAPI_VERSION_PATTERN

DEFAULT_FILENAMES = ['openapiv3.yaml', 'openapiv3.yml']
PYPROJECT_TOOL_NAME = 'protoc-gen-openapiv3'

# Options that may be passed through the protoc parameter string
PLUGIN_PARAMETERS = (
    'allow_merge',
    'include_package_in_tags',
    'include_all_messages',
    'output_file',
    'output_format',
    'openapi_version',
)


class GeneratorOptions(BaseSettings):
    """Options controlling document generation.

    Values come from keyword arguments, the protoc parameter string, a config
    file, or environment variables prefixed with ``PROTOC_GEN_OPENAPIV3_``.
    The document defaults only apply to files that declare none of their own.
    """

    model_config = SettingsConfigDict(env_prefix='PROTOC_GEN_OPENAPIV3_', extra='forbid')

    allow_merge: bool = Field(
        False, description='Merge all generated files into a single document.'
    )

    include_package_in_tags: bool = Field(
        False, description='Prefix operation tags with the proto package name.'
    )

    include_all_messages: bool = Field(
        True,
        description='Emit component schemas for messages and enums no operation references.',
    )

    output_file: str = Field(
        'openapi.yaml', description='Output file name used when merging files.'
    )

    output_format: Literal['yaml', 'json'] = Field(
        'yaml', description='Serialization format of the generated document.'
    )

    openapi_version: str = Field(
        '3.1.0',
        pattern=OPENAPI_VERSION_PATTERN,
        description='Value of the top-level openapi field, a 3.1.x version.',
    )

    info: options.Info | None = Field(
        None, description='Default document info for files without an info annotation.'
    )

    servers: list[options.Server] = Field(
        default_factory=list, description='Default servers.'
    )

    security_schemes: list[options.SecurityScheme] = Field(
        default_factory=list, description='Default security schemes.'
    )

    security: list[options.SecurityRequirement] = Field(
        default_factory=list, description='Default global security requirements.'
    )

    tags: list[options.Tag] = Field(default_factory=list, description='Default tags.')


def load_yaml(path: str | Path) -> dict:
    import yaml

    return yaml.load(Path(path).read_text(), Loader=yaml.FullLoader) or {}


def _build_options(data: dict, config_path: str | None = None) -> GeneratorOptions:
    try:
        return GeneratorOptions(**data)
    except ValidationError as e:
        error = e.errors()[0]
        field = '.'.join(str(part) for part in error['loc']) or None
        raise ConfigurationError(error['msg'], config_path=config_path, field=field) from e


def get_config(path: str | None = None) -> GeneratorOptions:
    """Load options from a file, the working directory or pyproject.toml.

    Falls back to defaults (and environment variables) when no configuration
    is found.
    """
    if path:
        try:
            data = load_yaml(path)
        except OSError as e:
            raise ConfigurationError(f'Cannot read configuration: {e}', config_path=str(path)) from e
        return _build_options(data, str(path))

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        path = Path(cwd) / filename
        if path.exists():
            return _build_options(load_yaml(path), str(path))

    path = Path(cwd) / 'pyproject.toml'

    if path.exists():
        import tomllib

        pyproject = tomllib.loads(path.read_text())
        tools = pyproject.get('tool', {})

        if PYPROJECT_TOOL_NAME in tools:
            return _build_options(tools[PYPROJECT_TOOL_NAME], str(path))

    return GeneratorOptions()


def parse_plugin_parameter(
    parameter: str, base: GeneratorOptions | None = None
) -> GeneratorOptions:
    """Apply a protoc parameter string such as ``allow_merge=true,output_format=json``.

    A bare key is read as ``key=true``.

    Raises:
        ConfigurationError: For an unknown key or an invalid value.
    """
    values = base.model_dump() if base is not None else {}

    for item in parameter.split(','):
        item = item.strip()
        if not item:
            continue
        key, _, value = item.partition('=')
        key = key.strip()
        if key not in PLUGIN_PARAMETERS:
            raise ConfigurationError(f"Unknown plugin parameter '{key}'", field=key)
        values[key] = value.strip() if value else 'true'

    return _build_options(values)
