"""Verify package imports work correctly."""


def test_import_kafka_file() -> None:
    """Test that kafka_file can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import kafka_file

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert kafka_file.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from kafka_file import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_api_is_exported() -> None:
    """Everything in __all__ resolves."""
    import kafka_file

    for name in kafka_file.__all__:
        assert hasattr(kafka_file, name), name
