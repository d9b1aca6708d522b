"""
Shared Test Fixtures

Temporary project trees, an isolated user config directory and a few
ready-made filetype rules.
"""

import pytest

from licensesnip.config.models import BlockDelimiters, Config, FiletypeRule, LinePrefix
from licensesnip.license.template import LicenseTemplate

LICENSE_TEXT = "Copyright {{year}} Example Corp\nFile: {{file}}\n"


@pytest.fixture(autouse=True)
def config_home(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.config"""
    home = tmp_path / "config_home"
    monkeypatch.setenv("LICENSESNIP_CONFIG_HOME", str(home))
    return home


@pytest.fixture
def project(tmp_path):
    """Empty project root containing only a license file"""
    root = tmp_path / "project"
    root.mkdir()
    (root / ".licensesnip").write_text(LICENSE_TEXT, encoding="utf-8")
    return root


@pytest.fixture
def template():
    return LicenseTemplate.from_text(LICENSE_TEXT)


@pytest.fixture
def rust_rule():
    return FiletypeRule(extension="rs", comment_style=LinePrefix("// "))


@pytest.fixture
def css_rule():
    return FiletypeRule(extension="css", comment_style=BlockDelimiters("/*", " */", line_prefix=" * "))


@pytest.fixture
def config(rust_rule, css_rule):
    """rs (line), css (block), py (line), md (disabled)"""
    return Config(filetypes={
        "rs": rust_rule,
        "css": css_rule,
        "py": FiletypeRule(extension="py", comment_style=LinePrefix("# ")),
        "md": FiletypeRule(extension="md", comment_style=BlockDelimiters("<!--", "-->"), enabled=False),
    })
