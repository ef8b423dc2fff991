from . import demo_routes

__all__ = ["demo_routes"]
