"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from code_cloze.config import Config, get_config, load_config, set_config
from code_cloze.config_loader import CONFIG_ENV_VAR
from code_cloze.exceptions import ConfigurationError


class TestConfigDefaults:
    def test_defaults(self) -> None:
        config = Config()

        assert config.anki_connect_url == "http://127.0.0.1:8765"
        assert config.anki_deck_name == "dev"
        assert config.anki_note_type == "anki-cloze-code"
        assert config.default_tags == ["anki-cloze-code"]
        assert config.max_blanks_per_card == 20
        assert config.language == "typescript"
        assert config.max_lines_per_chunk is None
        assert config.log_dir is None

    def test_environment_override(self, monkeypatch) -> None:
        monkeypatch.setenv("CODE_CLOZE_ANKI_DECK_NAME", "Interview")
        monkeypatch.setenv("CODE_CLOZE_MAX_BLANKS_PER_CARD", "5")

        config = Config()

        assert config.anki_deck_name == "Interview"
        assert config.max_blanks_per_card == 5

    def test_tags_from_string(self) -> None:
        assert Config(default_tags="a, b,,c").default_tags == ["a", "b", "c"]

    def test_language_is_normalized(self) -> None:
        assert Config(language=" TSX ").language == "tsx"


class TestConfigValidation:
    """Rejected values raise ConfigurationError."""

    def test_unsupported_language(self) -> None:
        with pytest.raises(ConfigurationError, match="Unsupported language"):
            Config(language="cobol")

    def test_unknown_style(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown highlight style"):
            Config(highlight_style="no-such-style")

    @pytest.mark.parametrize(
        "overrides",
        [
            {"max_blanks_per_card": 0},
            {"max_lines_per_chunk": 0},
            {"breadcrumb_depth": 0},
            {"context_lines": -1},
            {"label_width": 3},
        ],
    )
    def test_out_of_range_values(self, overrides) -> None:
        with pytest.raises(ConfigurationError):
            Config(**overrides)

    def test_assignment_is_validated(self) -> None:
        config = Config()

        with pytest.raises(ConfigurationError):
            config.max_blanks_per_card = 0


class TestLoadConfig:
    """YAML discovery and parsing."""

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("anki_deck_name: Custom\nmax_blanks_per_card: 3\n")

        config = load_config(path)

        assert config.anki_deck_name == "Custom"
        assert config.max_blanks_per_card == 3

    def test_yaml_beats_environment(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("CODE_CLOZE_ANKI_DECK_NAME", "FromEnv")
        path = tmp_path / "config.yaml"
        path.write_text("anki_deck_name: FromYaml\n")

        assert load_config(path).anki_deck_name == "FromYaml"

    def test_env_var_path(self, tmp_path: Path, monkeypatch) -> None:
        path = tmp_path / "elsewhere.yaml"
        path.write_text("language: javascript\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert load_config().language == "javascript"

    def test_cwd_config(self, tmp_path: Path) -> None:
        # The autouse fixture runs each test inside tmp_path
        (tmp_path / "config.yaml").write_text("context_lines: 2\n")

        assert load_config().context_lines == 2

    def test_no_file_uses_defaults(self) -> None:
        assert load_config().anki_deck_name == "dev"

    def test_missing_explicit_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Config file not found"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("anki_deck_name: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Failed to parse"):
            load_config(path)

    def test_non_mapping_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_singleton(self) -> None:
        config = Config(anki_deck_name="Pinned")
        set_config(config)

        assert get_config() is config
