"""Basic tests for package setup."""

import mediashrink


def test_version() -> None:
    """Test that version is defined."""
    assert mediashrink.__version__ == "0.1.0"


def test_public_api() -> None:
    """Test that the top-level exports resolve."""
    for name in mediashrink.__all__:
        assert hasattr(mediashrink, name), name


def test_errors_share_base() -> None:
    """Test that every exported error derives from MediaShrinkError."""
    for name in mediashrink.__all__:
        if name.endswith("Error"):
            assert issubclass(getattr(mediashrink, name), mediashrink.MediaShrinkError)
