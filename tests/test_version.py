"""Tests for the quickbench version information."""

from datetime import datetime

from quickbench.version.quickbench_version import Version


def test_version_methods():
    """Test Version class methods."""
    v = Version(
        major=1,
        minor=2,
        patch=3,
        date=datetime(2023, 1, 1),
    )

    assert str(v) == "1.2.3"
    assert v.semver() == (1, 2, 3)
    assert v.date_string("%Y") == "2023"
    assert v.full_version() == "1.2.3 (released 2023-01-01)"


def test_quickbench_version_instance():
    """Test the global QUICKBENCH_VERSION instance."""
    import quickbench
    from quickbench.version.quickbench_version import QUICKBENCH_VERSION

    assert isinstance(QUICKBENCH_VERSION, Version)
    assert QUICKBENCH_VERSION.major >= 0
    assert quickbench.__version__ == str(QUICKBENCH_VERSION)
