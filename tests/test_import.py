"""Test basic imports from the package."""


def test_main_import():
    """Test that the main package imports successfully."""
    import binpack
    assert binpack.__version__ == "0.1.0"
    assert callable(binpack.encode)
    assert callable(binpack.decode)


def test_codec_import():
    """Test codec module imports."""
    import binpack.codec as codec
    assert hasattr(codec, "BinaryWriter")
    assert hasattr(codec, "BinaryReader")
    assert hasattr(codec, "MAX_LENGTH")


def test_public_names_resolve():
    """Test every name in __all__ exists."""
    import binpack
    for name in binpack.__all__:
        assert hasattr(binpack, name), name
