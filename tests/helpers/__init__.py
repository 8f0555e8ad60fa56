from .parity import assert_hex_equal

__all__ = [
    "assert_hex_equal",
]
