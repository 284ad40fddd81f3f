"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest

from setup_skaffold.config import SetupConfig, load_config
from setup_skaffold.core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    """Run every test in an empty directory."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def environ(tmp_path):
    """Environment with a tool cache and nothing else."""
    return {"RUNNER_TOOL_CACHE": str(tmp_path / "runner-cache")}


class TestDefaults:
    """Tests for built-in defaults."""

    def test_defaults(self, environ, tmp_path):
        """Test defaults when nothing is configured."""
        config = load_config(environ=environ)

        assert config.version == "latest"
        assert config.github_token is None
        assert config.repository == "GoogleContainerTools/skaffold"
        assert config.install_path == Path("/usr/local/bin/skaffold")
        assert config.cache_dir == tmp_path / "runner-cache"
        assert config.http_timeout is None

    def test_cache_dir_without_runner(self):
        """Test the home directory cache is used outside Actions."""
        config = load_config(environ={})

        assert config.cache_dir == Path.home() / ".setup-skaffold" / "tool-cache"


class TestConfigFile:
    """Tests for the YAML layer."""

    def test_default_file_in_cwd(self, tmp_path, environ):
        """Test setup-skaffold.yaml in the working directory is read."""
        (tmp_path / "setup-skaffold.yaml").write_text(
            'version: "2.13.0"\ninstall_path: /opt/bin/skaffold\n'
        )

        config = load_config(environ=environ)

        assert config.version == "2.13.0"
        assert config.install_path == Path("/opt/bin/skaffold")

    def test_explicit_file(self, tmp_path, environ):
        """Test an explicit config file is read."""
        config_file = tmp_path / "custom.yaml"
        config_file.write_text(f"cache_dir: {tmp_path / 'cache'}\nhttp_timeout: 30\n")

        config = load_config(config_file, environ=environ)

        assert config.cache_dir == tmp_path / "cache"
        assert config.http_timeout == 30.0

    def test_explicit_file_must_exist(self, tmp_path, environ):
        """Test a missing explicit config file is an error."""
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.yaml", environ=environ)

    @pytest.mark.parametrize("version", ["2.10", "2", "true"])
    def test_unquoted_version_rejected(self, tmp_path, environ, version):
        """Test non-string YAML versions must be quoted."""
        (tmp_path / "setup-skaffold.yaml").write_text(f"version: {version}\n")

        with pytest.raises(ConfigError, match="quote"):
            load_config(environ=environ)

    def test_quoted_version(self, tmp_path, environ):
        """Test a quoted version keeps its trailing zero."""
        (tmp_path / "setup-skaffold.yaml").write_text('version: "2.10"\n')

        assert load_config(environ=environ).version == "2.10"

    def test_empty_file(self, tmp_path, environ):
        """Test an empty file means defaults."""
        (tmp_path / "setup-skaffold.yaml").write_text("")

        assert load_config(environ=environ).version == "latest"

    def test_invalid_yaml(self, tmp_path, environ):
        """Test broken YAML is reported."""
        (tmp_path / "setup-skaffold.yaml").write_text("version: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(environ=environ)

    def test_non_mapping(self, tmp_path, environ):
        """Test a YAML list is rejected."""
        (tmp_path / "setup-skaffold.yaml").write_text("- 2.13.0\n")

        with pytest.raises(ConfigError, match="mapping"):
            load_config(environ=environ)

    def test_unknown_keys(self, tmp_path, environ):
        """Test typos in setting names are reported."""
        (tmp_path / "setup-skaffold.yaml").write_text("verison: 2.13.0\n")

        with pytest.raises(ConfigError, match="verison"):
            load_config(environ=environ)

    @pytest.mark.parametrize("timeout", ["soon", "0", "-5"])
    def test_invalid_timeout(self, tmp_path, environ, timeout):
        """Test http_timeout must be a positive number."""
        (tmp_path / "setup-skaffold.yaml").write_text(f"http_timeout: {timeout}\n")

        with pytest.raises(ConfigError, match="http_timeout"):
            load_config(environ=environ)

    def test_invalid_repository(self, tmp_path, environ):
        """Test repository must be owner/repo."""
        (tmp_path / "setup-skaffold.yaml").write_text("repository: skaffold\n")

        with pytest.raises(ConfigError, match="owner/repo"):
            load_config(environ=environ)


class TestEnvironment:
    """Tests for the environment layer."""

    def test_action_inputs(self, environ):
        """Test GitHub Actions inputs are read."""
        environ.update({"INPUT_VERSION": "2.12.0", "INPUT_GITHUB-TOKEN": "input-token"})

        config = load_config(environ=environ)

        assert config.version == "2.12.0"
        assert config.github_token == "input-token"

    def test_github_token_fallback(self, environ):
        """Test GITHUB_TOKEN is used when no token input is given."""
        environ["GITHUB_TOKEN"] = "workflow-token"

        assert load_config(environ=environ).github_token == "workflow-token"

    def test_input_token_beats_github_token(self, environ):
        """Test an explicit token input wins over GITHUB_TOKEN."""
        environ.update({"GITHUB_TOKEN": "workflow-token", "INPUT_GITHUB_TOKEN": "mine"})

        assert load_config(environ=environ).github_token == "mine"

    def test_empty_input_version_means_latest(self, environ):
        """Test an empty version input falls back to latest."""
        environ["INPUT_VERSION"] = ""

        assert load_config(environ=environ).version == "latest"

    def test_environment_beats_file(self, tmp_path, environ):
        """Test environment values override the config file."""
        (tmp_path / "setup-skaffold.yaml").write_text('version: "2.0.0"\n')
        environ["INPUT_VERSION"] = "2.13.0"

        assert load_config(environ=environ).version == "2.13.0"


class TestOverrides:
    """Tests for the command-line layer."""

    def test_overrides_beat_environment(self, environ):
        """Test command-line values win."""
        environ["INPUT_VERSION"] = "2.12.0"

        config = load_config(overrides={"version": "2.13.0"}, environ=environ)

        assert config.version == "2.13.0"

    def test_none_overrides_ignored(self, environ):
        """Test unset command-line options don't clobber lower layers."""
        environ["INPUT_VERSION"] = "2.12.0"

        config = load_config(
            overrides={"version": None, "install_path": None}, environ=environ
        )

        assert config.version == "2.12.0"
        assert config.install_path == Path("/usr/local/bin/skaffold")

    def test_path_overrides(self, tmp_path, environ):
        """Test path options are used as given."""
        config = load_config(
            overrides={"cache_dir": tmp_path / "c", "install_path": tmp_path / "s"},
            environ=environ,
        )

        assert config.cache_dir == tmp_path / "c"
        assert config.install_path == tmp_path / "s"

    @pytest.mark.parametrize("version", ["../../x", "2.0/../x", "a\\b", "2.0/x", ".."])
    def test_version_with_path_parts_rejected(self, environ, version):
        """Test versions cannot point outside their cache directory."""
        with pytest.raises(ConfigError, match="Invalid version"):
            load_config(overrides={"version": version}, environ=environ)

    def test_version_with_path_parts_rejected_from_environment(self, environ):
        """Test INPUT_VERSION is checked the same way."""
        environ["INPUT_VERSION"] = "../escape"

        with pytest.raises(ConfigError, match="Invalid version"):
            load_config(environ=environ)


def test_setup_config_defaults():
    """Test SetupConfig can be built directly."""
    config = SetupConfig()

    assert config.version == "latest"
    assert config.cache_dir is None
