from .api import routes

__all__ = ["routes"]
