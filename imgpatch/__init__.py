"""Tools for patching binary images in place: byte replacement and zero trimming."""

__version__ = "0.1.0"
__all__ = ["bxhsed", "shrink"]