"""tests/unit/test_version.py"""

import reqline


def test_version():
    """Verify that the version string is present and valid."""
    assert isinstance(reqline.__version__, str)
    assert len(reqline.__version__) > 0
    # Basic semver-ish check
    assert reqline.__version__.count(".") >= 1
