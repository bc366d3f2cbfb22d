"""
Interface assembly.

Each WIT interface becomes one Scala file: a package object for imports,
or an annotated trait for exports, holding the interface's types,
resources and functions.
"""

from typing import TYPE_CHECKING, Dict, List

from ...core.naming import NameSanitizer
from ...core.schema import (
    FunctionKind,
    InterfaceId,
    RenderContext,
    Resource,
    SchemaGraph,
)
from . import annotations
from .resource import check_resource_function, render_resource

if TYPE_CHECKING:
    from .generator import ScalaGenerator


def _namespace_segments(sanitizer: NameSanitizer, namespace: str) -> List[str]:
    """
    Split ``ns:pkg/iface@version`` into snake_cased ``[ns, pkg]``.

    A namespace without ``:`` (a bare world key) contributes no segments.
    """
    if ":" not in namespace:
        return []

    package_part, rest = namespace.split(":", 1)
    package_name = rest.split("/", 1)[0].split("@", 1)[0]
    return [sanitizer.to_snake_case(package_part), sanitizer.to_snake_case(package_name)]


def _prefix_segments(base_segments: List[str], is_import: bool) -> List[str]:
    segments = list(base_segments)
    if not is_import:
        segments.append("exports")
    return segments


def get_package_path(
    sanitizer: NameSanitizer,
    base_segments: List[str],
    namespace: str,
    is_import: bool,
) -> str:
    """
    Get the Scala package an interface file declares.

    Imports live under ``base.ns.pkg``, exports under ``base.exports.ns.pkg``.
    """
    segments = _prefix_segments(base_segments, is_import)
    segments.extend(_namespace_segments(sanitizer, namespace))
    return ".".join(segments)


def get_interface_file_path(
    sanitizer: NameSanitizer,
    base_segments: List[str],
    namespace: str,
    interface_name: str,
    is_import: bool,
) -> str:
    """Get the relative path of the Scala file for an interface."""
    segments = _prefix_segments(base_segments, is_import)
    segments.extend(_namespace_segments(sanitizer, namespace))
    file_name = f"{sanitizer.to_snake_case(interface_name)}.scala"
    return "/".join(segments + [file_name])


def render_interface(
    generator: "ScalaGenerator",
    graph: SchemaGraph,
    interface_id: InterfaceId,
    namespace: str,
    is_import: bool,
) -> str:
    """
    Render a complete interface file.

    Every fragment is rendered with a context for this interface, so types
    from sibling interfaces come out fully qualified.

    Raises:
        UnsupportedCapabilityError: When exporting an interface with resources
        MalformedSchemaError: When a resource function targets something
            other than a resource of this interface
    """
    iface = graph.interface(interface_id)
    ctx = RenderContext.for_interface(interface_id)
    interface_name = iface.name or namespace

    for func in iface.functions.values():
        check_resource_function(graph, func, interface_id)

    resource_ids = [
        type_id
        for type_id in iface.types.values()
        if isinstance(graph.type_def(type_id).kind, Resource)
    ]

    # Resources block exports before anything is rendered
    resources = [
        render_resource(generator, graph, type_id, namespace, is_import, ctx)
        for type_id in resource_ids
    ]

    types = []
    for type_id in iface.types.values():
        typedef = generator.render_typedef(graph, type_id, ctx)
        if typedef:
            types.append(typedef)

    functions = [
        generator.render_function(graph, func, is_import, namespace, ctx)
        for func in iface.functions.values()
        if func.kind == FunctionKind.FREESTANDING
    ]

    sections: List[Dict[str, object]] = []
    for heading, entries in (
        ("Type definitions", types),
        ("Resources", resources),
        ("Functions", functions),
    ):
        if entries:
            sections.append({"heading": heading, "entries": entries})

    if is_import:
        object_name = generator.sanitizer.to_snake_case(interface_name)
    else:
        object_name = generator.sanitizer.to_pascal_case(interface_name)

    return generator.render_template(
        "package.scala.j2",
        generator.template_context(
            package=get_package_path(
                generator.sanitizer, generator.base_segments, namespace, is_import
            ),
            is_import=is_import,
            object_name=object_name,
            annotation=annotations.wit_export_interface(),
            sections=sections,
        ),
    )
