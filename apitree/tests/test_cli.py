"""Test CLI functionality."""

import json
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from apitree.cli import app
from apitree.config import CodegenConfig, DocumentConfig
from apitree.exceptions import ConfigurationError

from .fixtures import KUBERNETES_SWAGGER


@pytest.fixture
def runner():
    """Fixture providing CLI test runner."""
    return CliRunner()


@pytest.fixture
def sample_config():
    """Fixture providing sample configuration."""
    return CodegenConfig(
        documents=[
            DocumentConfig(
                source='https://kubernetes.local/swagger.json',
                output='./client/kubernetes.py',
            )
        ]
    )


@pytest.fixture
def swagger_file(tmp_path):
    """Create a temp file with the Kubernetes swagger document."""
    spec_file = tmp_path / 'swagger.json'
    spec_file.write_text(json.dumps(KUBERNETES_SWAGGER))
    return spec_file


class TestGenerateCommand:
    """Test the generate command."""

    @patch('apitree.cli.get_config')
    @patch('apitree.cli.Codegen')
    def test_generate_without_config_file(
        self, mock_codegen_class, mock_get_config, runner, sample_config
    ):
        """Test generate command without specifying config file."""
        mock_get_config.return_value = sample_config
        mock_codegen_instance = MagicMock()
        mock_codegen_instance.generate.return_value = 'client/kubernetes.py'
        mock_codegen_class.return_value = mock_codegen_instance

        result = runner.invoke(app, ['generate'])

        assert result.exit_code == 0
        mock_get_config.assert_called_once_with(None)
        mock_codegen_class.assert_called_once_with(sample_config.documents[0])
        mock_codegen_instance.generate.assert_called_once()
        assert 'client/kubernetes.py' in result.stdout
        assert 'Successfully generated code' in result.stdout

    @patch('apitree.cli.get_config')
    @patch('apitree.cli.Codegen')
    def test_generate_with_config_file(
        self, mock_codegen_class, mock_get_config, runner, sample_config
    ):
        """Test generate command with config file specified."""
        mock_get_config.return_value = sample_config
        mock_codegen_class.return_value = MagicMock()

        result = runner.invoke(app, ['generate', '--config', 'apitree.yaml'])

        assert result.exit_code == 0
        mock_get_config.assert_called_once_with('apitree.yaml')

    @patch('apitree.cli.get_config')
    def test_generate_configuration_error(self, mock_get_config, runner):
        """Test that apitree errors exit with status 1."""
        mock_get_config.side_effect = ConfigurationError('Configuration not found')

        result = runner.invoke(app, ['generate'])

        assert result.exit_code == 1
        assert 'Configuration not found' in result.stdout

    @patch('apitree.cli.get_config')
    @patch('apitree.cli.Codegen')
    def test_generate_unexpected_error(
        self, mock_codegen_class, mock_get_config, runner, sample_config
    ):
        """Test that unexpected errors exit with status 1."""
        mock_get_config.return_value = sample_config
        mock_codegen_class.return_value.generate.side_effect = RuntimeError('boom')

        result = runner.invoke(app, ['generate'])

        assert result.exit_code == 1
        assert 'boom' in result.stdout

    def test_generate_end_to_end(self, runner, tmp_path, swagger_file, monkeypatch):
        """Test generate against a real configuration file."""
        (tmp_path / 'apitree.yaml').write_text(
            f'documents:\n  - source: {swagger_file}\n    output: client.py\n    root: api\n'
        )
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ['generate'])

        assert result.exit_code == 0
        assert 'class Client(_Resource):' in (tmp_path / 'client.py').read_text()


class TestInspectCommand:
    """Test the inspect command."""

    def test_inspect(self, runner, swagger_file):
        result = runner.invoke(app, ['inspect', str(swagger_file)])

        assert result.exit_code == 0
        assert 'namespaces' in result.stdout
        assert '{namespace}' in result.stdout
        assert '10 resources' in result.stdout

    def test_inspect_root(self, runner, swagger_file):
        result = runner.invoke(app, ['inspect', str(swagger_file), '--root', 'nodes'])

        assert result.exit_code == 0
        assert 'nodes' in result.stdout
        assert 'namespaces' not in result.stdout

    def test_inspect_unknown_root(self, runner, swagger_file):
        result = runner.invoke(app, ['inspect', str(swagger_file), '-r', 'missing'])

        assert result.exit_code == 1
        assert 'not found' in result.stdout

    def test_inspect_cycle(self, runner, tmp_path):
        spec_file = tmp_path / 'cycle.json'
        spec_file.write_text(
            json.dumps({'swagger': '2.0', 'paths': {'/a/b': {'get': {}}, '/b/a': {'get': {}}}})
        )

        result = runner.invoke(app, ['inspect', str(spec_file)])

        assert result.exit_code == 0
        assert '(cycle)' in result.stdout

    def test_inspect_missing_file(self, runner, tmp_path):
        result = runner.invoke(app, ['inspect', str(tmp_path / 'missing.json')])

        assert result.exit_code == 1
        assert 'Error' in result.stdout


class TestVersionCommand:
    """Test the version command."""

    def test_version(self, runner):
        result = runner.invoke(app, ['version'])

        assert result.exit_code == 0
        assert 'apitree version:' in result.stdout
