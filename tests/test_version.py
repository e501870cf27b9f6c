"""Tests for duolog._version — PEP 440 compliance and version parsing."""

import re

from duolog import __app_name__, __version__
from duolog._version import (
    BASE_VERSION,
    MAJOR, MINOR, PATCH,
    PIP_VERSION,
    VERSION,
    get_base_version,
    get_pip_version,
    get_version,
)


def test_base_version_format():
    """Base version should be MAJOR.MINOR.PATCH-PHASE."""
    base = get_base_version()
    assert re.match(r"^\d+\.\d+\.\d+(-\w+)?$", base), \
        f"Unexpected base version format: {base}"


def test_base_version_matches_components():
    """Base version should match the MAJOR.MINOR.PATCH constants."""
    assert get_base_version().startswith(f"{MAJOR}.{MINOR}.{PATCH}")


def test_pip_version_pep440():
    """PIP version must be PEP 440 compliant (no hyphens, proper pre-release)."""
    pip_ver = get_pip_version()
    assert "-" not in pip_ver, \
        f"PEP 440 forbids hyphens in version: {pip_ver}"
    assert re.match(r"^\d+\.\d+\.\d+((a|b|rc)\d+)?(\.dev\d+)?$", pip_ver), \
        f"PIP version is not PEP 440: {pip_ver}"


def test_module_constants():
    """Convenience constants mirror the getter functions."""
    assert VERSION == get_version() == __version__
    assert BASE_VERSION == get_base_version()
    assert PIP_VERSION == get_pip_version()


def test_app_name():
    assert __app_name__ == "duolog"
