from .logging import struct_logging_middleware

__all__ = ["struct_logging_middleware"]
