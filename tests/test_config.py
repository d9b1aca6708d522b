"""
Tests for Configuration

Rule parsing, default config creation and user/local merging.
"""

import pytest
import yaml

from licensesnip.config import (
    DEFAULT_CONFIG,
    BlockDelimiters,
    ConfigStore,
    LinePrefix,
    default_config_home,
    load_config,
    parse_filetypes,
    parse_rule
)
from licensesnip.errors import ConfigCreateError, ConfigFormatError, ConfigReadError
from licensesnip.utils.config_loader import ConfigLoader


class TestParseRule:
    """Test single filetype entries"""

    def test_line_style(self):
        """Test before_line alone gives a line prefix"""
        rule = parse_rule("rs", {"before_line": "// "})
        assert rule.comment_style == LinePrefix("// ")
        assert rule.enabled

    def test_block_style(self):
        """Test before_block/after_block give block delimiters"""
        rule = parse_rule("css", {"before_block": "/*", "before_line": " * ", "after_block": " */"})
        assert rule.comment_style == BlockDelimiters("/*", " */", " * ")

    def test_disabled(self):
        """Test enable: false is kept"""
        rule = parse_rule("md", {"enable": False, "before_line": "<!-- "})
        assert not rule.enabled

    @pytest.mark.parametrize("entry", [
        {},
        {"enable": True},
        {"before_block": "/*"},
        {"before_line": 3},
        {"enable": "yes", "before_line": "# "},
        "// ",
    ])
    def test_invalid_entries(self, entry):
        """Test entries without a usable style are rejected"""
        with pytest.raises(ConfigFormatError):
            parse_rule("x", entry)


class TestParseFiletypes:
    """Test the filetypes mapping"""

    def test_comma_keys_expand(self):
        """Test 'js,ts' yields one rule per extension"""
        rules = parse_filetypes({"js, ts": {"before_line": "// "}})
        assert sorted(rules) == ["js", "ts"]
        assert rules["ts"].extension == "ts"

    def test_leading_dot_stripped(self):
        """Test '.py' keys are normalised to 'py'"""
        assert list(parse_filetypes({".py": {"before_line": "# "}})) == ["py"]

    def test_duplicate_extension(self):
        """Test an extension listed twice is an error"""
        with pytest.raises(ConfigFormatError, match="more than once"):
            parse_filetypes({"js,ts": {"before_line": "// "}, "ts": {"before_line": "# "}})

    def test_not_a_mapping(self):
        """Test a list is rejected"""
        with pytest.raises(ConfigFormatError):
            parse_filetypes(["rs"])

    def test_defaults_parse(self):
        """Test the shipped defaults are valid"""
        rules = parse_filetypes(DEFAULT_CONFIG["filetypes"])
        assert rules["rs"].comment_style == LinePrefix("// ")
        assert rules["py"].comment_style == LinePrefix("# ")
        assert not rules["md"].enabled


class TestConfigStore:
    """Test loading from disk"""

    def test_config_home_from_env(self, config_home):
        """Test LICENSESNIP_CONFIG_HOME wins"""
        assert default_config_home() == config_home

    def test_config_home_from_xdg(self, tmp_path, monkeypatch):
        """Test XDG_CONFIG_HOME is used when no override is set"""
        monkeypatch.delenv("LICENSESNIP_CONFIG_HOME")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        assert default_config_home() == tmp_path / "xdg" / "licensesnip"

    def test_creates_default_user_config(self, project, config_home):
        """Test first load writes the defaults"""
        store = ConfigStore(project)

        config = store.load()

        assert store.user_config_path.exists()
        assert yaml.safe_load(store.user_config_path.read_text(encoding="utf-8")) == DEFAULT_CONFIG
        assert "rs" in config.get_filetype_map()

    def test_existing_user_config_not_overwritten(self, project, config_home):
        """Test ensure_user_config leaves user edits alone"""
        config_home.mkdir(parents=True)
        (config_home / "config.yaml").write_text("filetypes:\n  zig:\n    before_line: '// '\n", encoding="utf-8")

        store = ConfigStore(project)
        assert store.ensure_user_config() is False
        assert list(store.load().get_filetype_map()) == ["zig"]

    def test_local_overrides_user(self, project):
        """Test local rules win per extension and add new ones"""
        (project / "licensesnip.config.yaml").write_text(
            "filetypes:\n"
            "  rs:\n"
            "    before_block: '/*'\n"
            "    after_block: '*/'\n"
            "  zig:\n"
            "    before_line: '// '\n",
            encoding="utf-8"
        )

        config = load_config(project)
        rules = config.get_filetype_map()

        assert rules["rs"].comment_style == BlockDelimiters("/*", "*/")
        assert rules["zig"].comment_style == LinePrefix("// ")
        assert rules["py"].comment_style == LinePrefix("# ")

    def test_json_local_config_accepted(self, project):
        """Test JSON syntax parses as YAML"""
        (project / "licensesnip.config.yaml").write_text(
            '{"filetypes": {"kt": {"before_line": "// "}}}', encoding="utf-8"
        )
        assert "kt" in load_config(project).get_filetype_map()

    def test_malformed_yaml(self, project):
        """Test invalid YAML raises ConfigFormatError"""
        (project / "licensesnip.config.yaml").write_text("filetypes: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigFormatError):
            load_config(project)

    def test_missing_filetypes_key(self, project):
        """Test a config without 'filetypes' is malformed"""
        (project / "licensesnip.config.yaml").write_text("other: 1\n", encoding="utf-8")
        with pytest.raises(ConfigFormatError, match="filetypes"):
            load_config(project)

    def test_unreadable_user_config(self, project, config_home):
        """Test a directory in place of the config file is a read error"""
        (config_home / "config.yaml").mkdir(parents=True)
        with pytest.raises(ConfigReadError):
            load_config(project)

    def test_cannot_create_user_config(self, project, tmp_path, monkeypatch):
        """Test an unusable config home raises ConfigCreateError"""
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")
        monkeypatch.setenv("LICENSESNIP_CONFIG_HOME", str(blocker / "licensesnip"))

        with pytest.raises(ConfigCreateError):
            load_config(project)


class TestConfigLoader:
    """Test the YAML loader"""

    def test_missing_file(self, tmp_path):
        """Test FileNotFoundError for absent files"""
        with pytest.raises(FileNotFoundError):
            ConfigLoader.load(str(tmp_path / "nope.yaml"))

    def test_empty_file(self, tmp_path):
        """Test an empty document loads as {}"""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert ConfigLoader.load(str(path)) == {}

    def test_required_keys(self, tmp_path):
        """Test missing required keys raise ValueError"""
        path = tmp_path / "c.yaml"
        path.write_text("a: 1\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Missing required"):
            ConfigLoader.load(str(path), required_keys=["a", "b"])

    def test_non_mapping_root(self, tmp_path):
        """Test a top-level list is rejected"""
        path = tmp_path / "c.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            ConfigLoader.load(str(path))
