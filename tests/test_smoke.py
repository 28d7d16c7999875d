"""Smoke test to verify the gateway packages import and the interpreter fits."""


def test_packages_import():
    """Core modules import without side effects beyond app creation."""
    import app
    from services.gateway_api import main, service

    assert app.__version__
    assert main.app.title == "Audio Gateway API"
    assert service.ProcessingGateway is not None


def test_python_version():
    """Verify Python version meets requirements."""
    import sys

    assert sys.version_info >= (3, 11), "Python 3.11 or higher required"
