import json
from typing import Annotated

import typer
import yaml
from rich.console import Console

from protoc_gen_openapiv3.config import get_config
from protoc_gen_openapiv3.converter import ComponentRegistry, DocumentAssembler, SchemaResolver
from protoc_gen_openapiv3.exceptions import ProtoOpenAPIError
from protoc_gen_openapiv3.loader import DescriptionLoader
from protoc_gen_openapiv3.model import merge_parsed_files
from protoc_gen_openapiv3.openapi import Reference
from protoc_gen_openapiv3.writer import DocumentWriter

console = Console()
app = typer.Typer(
    name='openapiv3',
    help='Generate OpenAPI 3.1 documents from protobuf service descriptions',
    no_args_is_help=True,
)

STDOUT = '-'


@app.command()
def generate(
    source: Annotated[
        str,
        typer.Argument(
            help='Description file or URL (YAML/JSON), or a descriptor set (.pb, .binpb, .desc)'
        ),
    ],
    output: Annotated[
        str | None,
        typer.Option('--output', '-o', help="Output file, or '-' for stdout"),
    ] = None,
    output_format: Annotated[
        str | None,
        typer.Option('--format', '-f', help='Output format: yaml or json'),
    ] = None,
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
) -> None:
    """Generate an OpenAPI document from a service description.

    Several files in one source are merged into a single document.

    Examples:
        openapiv3 generate user_service.yaml
        openapiv3 generate descriptors.binpb -o api.json -f json
        openapiv3 generate user_service.yaml -o -
    """
    try:
        options = get_config(config)
        writer = DocumentWriter(output_format or options.output_format)

        files = DescriptionLoader().load(source)
        document = DocumentAssembler(options).convert(merge_parsed_files(files))

        if output == STDOUT:
            print(writer.serialize(document), end='')
            return

        if output is None:
            stem = options.output_file.rsplit('.', 1)[0]
            output = f'{stem}.{writer.extension}'
        writer.write(document, output)

    except ProtoOpenAPIError as e:
        console.print(f'[red]Error:[/red] {e.message}')
        raise typer.Exit(1)

    console.print(f'[green]Generated[/green] {output}')
    console.print(
        f'[dim]{len(document.paths.root)} path(s), '
        f'{len(document.components.schemas or {}) if document.components else 0} schema(s)[/dim]'
    )


@app.command()
def schema(
    source: Annotated[str, typer.Argument(help='Description file, URL or descriptor set')],
    message: Annotated[str, typer.Argument(help='Message or enum name')],
    output_format: Annotated[
        str,
        typer.Option('--format', '-f', help='Output format: yaml or json'),
    ] = 'yaml',
) -> None:
    """Print the schema of one message or enum.

    Examples:
        openapiv3 schema user_service.yaml User
        openapiv3 schema descriptors.binpb test.package.User -f json
    """
    try:
        parsed = merge_parsed_files(DescriptionLoader().load(source))
    except ProtoOpenAPIError as e:
        console.print(f'[red]Error:[/red] {e.message}')
        raise typer.Exit(1)

    resolver = SchemaResolver(parsed, ComponentRegistry())
    result = resolver.message_schema(message)
    if isinstance(result, Reference):
        console.print(f"[red]Error:[/red] Unknown message or enum '{message}'")
        raise typer.Exit(1)

    data = result.model_dump(mode='json', by_alias=True, exclude_none=True)
    if output_format == 'json':
        print(json.dumps(data, indent=2))
    else:
        print(yaml.safe_dump(data, sort_keys=False), end='')


@app.command()
def version() -> None:
    """Show the version of protoc-gen-openapiv3."""
    from protoc_gen_openapiv3._version import version

    console.print(f'protoc-gen-openapiv3 version: {version}')


if __name__ == '__main__':
    app()
