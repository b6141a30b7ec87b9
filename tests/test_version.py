"""Test version information."""

import importlib.metadata
import re

from clawscan import __version__


def test_version_string():
    assert isinstance(__version__, str)
    assert "." in __version__  # Should have at least major.minor format


def test_version_matches_package_metadata():
    """__version__ follows the installed distribution when there is one."""
    try:
        package_version = importlib.metadata.version("clawscan")
    except importlib.metadata.PackageNotFoundError:
        # Package not installed, nothing to compare against
        return
    assert __version__ == package_version


def test_version_format():
    semver_pattern = r"^\d+\.\d+\.\d+(?:-[a-zA-Z0-9]+(?:\.\d+)?)?$"
    assert re.match(
        semver_pattern, __version__
    ), f"Version {__version__} doesn't follow semver format"
