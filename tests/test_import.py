"""Test basic package imports."""


def test_package_import():
    """Test that the main package can be imported."""
    import lunara

    assert lunara.__version__ == "0.1.0"


def test_banner_mentions_version():
    """Test the readiness banner."""
    import lunara

    assert lunara.banner() == "Lunara core ready (v0.1.0)"


def test_public_modules_import():
    """Test that the public modules import cleanly."""
    from lunara import components, errors, models, services  # noqa: F401
    from lunara.components import parse_status, repo_info, status_summary  # noqa: F401
    from lunara.services import load, load_from  # noqa: F401
