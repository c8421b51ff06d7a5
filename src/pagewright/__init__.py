"""Pagewright - compiles declarative page models into mini-program packages."""

__version__ = "1.0.0"

__all__ = ["__version__"]
