"""
World assembly.

Types declared directly in a world (not inside an interface) are collected
into a package object named after the world.
"""

from typing import TYPE_CHECKING, List, Optional

from ...core.naming import NameSanitizer
from ...core.schema import RenderContext, SchemaGraph, TypeItem, WorldId

if TYPE_CHECKING:
    from .generator import ScalaGenerator


def _world_segments(
    sanitizer: NameSanitizer, base_segments: List[str], world_name: str, is_import: bool
) -> List[str]:
    segments = list(base_segments)
    if not is_import:
        segments.append("exports")
    segments.append(sanitizer.to_snake_case(world_name))
    return segments


def get_world_package_path(
    sanitizer: NameSanitizer, base_segments: List[str], world_name: str, is_import: bool
) -> str:
    """Get the Scala package of a world file, ``base[.exports].world``."""
    return ".".join(_world_segments(sanitizer, base_segments, world_name, is_import))


def get_world_file_path(
    sanitizer: NameSanitizer, base_segments: List[str], world_name: str, is_import: bool
) -> str:
    """Get the relative path of a world file, ``base/[exports/]world/package.scala``."""
    segments = _world_segments(sanitizer, base_segments, world_name, is_import)
    return "/".join(segments + ["package.scala"])


def render_world(
    generator: "ScalaGenerator",
    graph: SchemaGraph,
    world_id: WorldId,
    is_import: bool,
) -> Optional[str]:
    """
    Render the world-level types imported or exported by a world.

    World-level functions are not rendered; they are reported when the
    schema is validated.

    Returns:
        File source, or None when the world has no world-level types on
        that side
    """
    world = graph.world(world_id)
    items = world.imports if is_import else world.exports
    ctx = RenderContext()

    types = []
    for item in items.values():
        if isinstance(item, TypeItem):
            typedef = generator.render_typedef(graph, item.id, ctx)
            if typedef:
                types.append(typedef)

    if not types:
        return None

    return generator.render_template(
        "package.scala.j2",
        generator.template_context(
            package=get_world_package_path(
                generator.sanitizer, generator.base_segments, world.name, is_import
            ),
            is_import=True,
            object_name=generator.sanitizer.to_snake_case(world.name),
            annotation="",
            sections=[{"heading": "Type definitions", "entries": types}],
        ),
    )
