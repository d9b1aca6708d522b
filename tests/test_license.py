"""
Tests for License Template
"""

import pytest

from licensesnip.errors import LicenseNotFoundError
from licensesnip.license import LicenseTemplate, read_license


def test_read_license(project):
    """Test .licensesnip is read line by line"""
    template = read_license(project)
    assert template.get_lines() == ("Copyright {{year}} Example Corp", "File: {{file}}")


def test_trailing_newline_ignored():
    """Test a final newline does not create an empty line"""
    assert LicenseTemplate.from_text("a\nb\n").lines == ("a", "b")
    assert LicenseTemplate.from_text("a\n\nb").lines == ("a", "", "b")


def test_crlf_license():
    """Test CRLF license files split cleanly"""
    assert LicenseTemplate.from_text("a\r\nb\r\n").lines == ("a", "b")


def test_missing_license(tmp_path):
    """Test absent .licensesnip raises LicenseNotFoundError"""
    with pytest.raises(LicenseNotFoundError, match=".licensesnip"):
        read_license(tmp_path)
