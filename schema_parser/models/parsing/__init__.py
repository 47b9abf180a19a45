from .parser import Parser, Settings

__all__ = ["Parser", "Settings"]
