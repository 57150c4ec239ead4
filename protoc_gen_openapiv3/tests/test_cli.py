"""Test CLI functionality."""

import json
from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from protoc_gen_openapiv3._version import version
from protoc_gen_openapiv3.cli import app
from protoc_gen_openapiv3.config import GeneratorOptions

from .fixtures import CYCLIC_MESSAGES_FILE, USER_SERVICE_FILE


@pytest.fixture
def runner():
    """Fixture providing CLI test runner."""
    return CliRunner()


@pytest.fixture
def source(tmp_path):
    """Fixture providing a description file with two proto files."""
    path = tmp_path / 'services.yaml'
    path.write_text(yaml.dump({'files': [USER_SERVICE_FILE, CYCLIC_MESSAGES_FILE]}))
    return path


class TestGenerateCommand:
    """Test the generate command."""

    @patch('protoc_gen_openapiv3.cli.get_config')
    def test_generate_to_file(self, mock_get_config, runner, source, tmp_path):
        mock_get_config.return_value = GeneratorOptions()
        output = tmp_path / 'api.json'

        result = runner.invoke(app, ['generate', str(source), '-o', str(output), '-f', 'json'])

        assert result.exit_code == 0
        mock_get_config.assert_called_once_with(None)
        assert 'Generated' in result.stdout
        document = json.loads(output.read_text())
        assert '/v1/users/{user_id}' in document['paths']
        assert {'User', 'Node'} <= set(document['components']['schemas'])

    @patch('protoc_gen_openapiv3.cli.get_config')
    def test_generate_to_stdout(self, mock_get_config, runner, source):
        mock_get_config.return_value = GeneratorOptions()

        result = runner.invoke(app, ['generate', str(source), '--output', '-'])

        assert result.exit_code == 0
        document = yaml.safe_load(result.stdout)
        assert document['openapi'] == '3.1.0'
        assert document['info']['title'] == 'test.package'

    def test_default_output_name(self, runner, source, tmp_path, monkeypatch):
        """Test that the configured output file name is used without --output."""
        config = tmp_path / 'openapiv3.yaml'
        config.write_text('output_file: users.yaml\noutput_format: json\n')
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ['generate', str(source), '--config', str(config)])

        assert result.exit_code == 0
        assert json.loads((tmp_path / 'users.json').read_text())['openapi'] == '3.1.0'

    @patch('protoc_gen_openapiv3.cli.get_config')
    def test_missing_source(self, mock_get_config, runner, tmp_path):
        mock_get_config.return_value = GeneratorOptions()

        result = runner.invoke(app, ['generate', str(tmp_path / 'missing.yaml'), '-o', '-'])

        assert result.exit_code == 1
        assert 'Error' in result.stdout

    @patch('protoc_gen_openapiv3.cli.get_config')
    def test_unknown_format(self, mock_get_config, runner, source):
        mock_get_config.return_value = GeneratorOptions()

        result = runner.invoke(app, ['generate', str(source), '-f', 'toml'])

        assert result.exit_code == 1
        assert 'Unsupported feature' in result.stdout


class TestSchemaCommand:
    """Test the schema command."""

    def test_message_schema(self, runner, source):
        result = runner.invoke(app, ['schema', str(source), 'User', '-f', 'json'])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            'type': 'object',
            'properties': {'user_id': {'type': 'string'}, 'email': {'type': 'string'}},
            'required': ['user_id', 'email'],
            'description': 'A registered user.',
        }

    def test_qualified_name(self, runner, source):
        result = runner.invoke(app, ['schema', str(source), 'test.package.UserStatus'])

        assert result.exit_code == 0
        assert yaml.safe_load(result.stdout)['enum'] == [
            'USER_STATUS_UNSPECIFIED',
            'USER_STATUS_ACTIVE',
        ]

    def test_unknown_message(self, runner, source):
        result = runner.invoke(app, ['schema', str(source), 'Missing'])

        assert result.exit_code == 1
        assert 'Unknown message or enum' in result.stdout


class TestVersionCommand:
    """Test the version command."""

    def test_version(self, runner):
        result = runner.invoke(app, ['version'])

        assert result.exit_code == 0
        assert version in result.stdout
