"""
Scala code generator module.

Generates Scala.js component model bindings: case classes, sealed traits,
flag wrappers and resource traits annotated for the WIT runtime.
"""

from .generator import ScalaGenerator, create_scala_generator
from .naming import create_scala_sanitizer
from .types import ScalaTypeConfig, ScalaTypeMapper
from .interface import get_interface_file_path, get_package_path, render_interface
from .resource import render_resource
from .world import get_world_file_path, get_world_package_path, render_world

__all__ = [
    "ScalaGenerator",
    "ScalaTypeConfig",
    "ScalaTypeMapper",
    "create_scala_generator",
    "create_scala_sanitizer",
    # Assembly
    "get_interface_file_path",
    "get_package_path",
    "get_world_file_path",
    "get_world_package_path",
    "render_interface",
    "render_resource",
    "render_world",
]
