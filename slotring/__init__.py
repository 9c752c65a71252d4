"""Fixed-capacity slot storage with stable keys and an SPSC ring buffer."""

__version__ = "0.1.0"
__all__ = ["boxed", "ring", "storage"]