"""ShareNote: content addressing and access control for shared notes."""

__version__ = "1.0.0"
