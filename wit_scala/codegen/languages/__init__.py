"""
Language-specific code generators.
"""

from .scala import ScalaGenerator, create_scala_generator

__all__ = ["ScalaGenerator", "create_scala_generator"]
