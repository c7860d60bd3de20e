from . import logging, serialization

__all__ = ["logging", "serialization"]
