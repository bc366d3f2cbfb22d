"""
Resource rendering.

A WIT resource becomes a trait holding its instance methods and destructor,
plus a companion object holding its constructor and static methods.
"""

from typing import TYPE_CHECKING, List

from ...core.generator import MalformedSchemaError, UnsupportedCapabilityError
from ...core.schema import (
    Function,
    FunctionKind,
    InterfaceId,
    RenderContext,
    Resource,
    SchemaGraph,
    TypeId,
)
from . import annotations

if TYPE_CHECKING:
    from .generator import ScalaGenerator


def check_resource_function(
    graph: SchemaGraph, func: Function, interface_id: InterfaceId
) -> None:
    """
    Check that a method, constructor or static targets a resource of its
    own interface.

    Raises:
        MalformedSchemaError: If the target is missing, not a resource, or
            owned by another interface
    """
    if func.kind == FunctionKind.FREESTANDING:
        return

    if func.resource is None:
        raise MalformedSchemaError(
            f"{func.kind.value} '{func.name}' does not name its resource"
        )

    target = graph.type_def(func.resource)
    if not isinstance(target.kind, Resource):
        raise MalformedSchemaError(
            f"{func.kind.value} '{func.name}' targets "
            f"{type(target.kind).__name__.rstrip('_').lower()} "
            f"'{target.name}', which is not a resource"
        )

    if target.owner != interface_id:
        raise MalformedSchemaError(
            f"{func.kind.value} '{func.name}' targets resource '{target.name}' "
            f"from another interface"
        )


def render_resource(
    generator: "ScalaGenerator",
    graph: SchemaGraph,
    resource_id: TypeId,
    namespace: str,
    is_import: bool,
    ctx: RenderContext,
) -> str:
    """
    Render a resource as a trait plus companion object.

    Args:
        generator: Generator supplying naming, type mapping and templates
        graph: Schema graph
        resource_id: Resource type to render
        namespace: WIT namespace of the owning interface
        is_import: Only imported resources can be rendered
        ctx: Rendering context of the owning interface

    Returns:
        Scala source for the trait and its companion

    Raises:
        UnsupportedCapabilityError: If asked to export the resource
        MalformedSchemaError: If the type is not a resource or has more than
            one constructor
    """
    resource = graph.type_def(resource_id)
    if not isinstance(resource.kind, Resource):
        raise MalformedSchemaError(
            f"Type '{resource.name}' is not a resource"
        )

    resource_name = resource.name or ""
    interface_name = ""
    if resource.owner is not None:
        interface_name = graph.interface(resource.owner).name or ""

    if not is_import:
        raise UnsupportedCapabilityError(
            f"Scala bindings do not support exporting resources. Resource "
            f"'{resource_name}' in interface '{interface_name}' cannot be exported.",
            resource_name=resource_name,
            interface_name=interface_name,
        )

    scala_name = generator.type_mapper.type_name(graph, resource_id)

    functions: List[Function] = []
    if resource.owner is not None:
        functions = [
            func
            for func in graph.interface(resource.owner).functions.values()
            if func.belongs_to(resource_id)
        ]

    methods = []
    # Companion members keep declaration order
    members = []
    constructors = 0
    for func in functions:
        if func.kind == FunctionKind.METHOD:
            methods.append(
                generator.render_signature(
                    graph, func, annotations.wit_resource_method(func.name), ctx
                )
            )
        elif func.kind == FunctionKind.CONSTRUCTOR:
            constructors += 1
            members.append(
                generator.render_signature(
                    graph,
                    func,
                    annotations.wit_resource_constructor(),
                    ctx,
                    name="apply",
                    result=scala_name,
                )
            )
        elif func.kind == FunctionKind.STATIC:
            members.append(
                generator.render_signature(
                    graph,
                    func,
                    annotations.wit_resource_static_method(func.name),
                    ctx,
                )
            )

    if constructors > 1:
        raise MalformedSchemaError(
            f"Resource '{resource_name}' has {constructors} constructors"
        )

    methods.append(
        generator.render_def(
            docs="",
            annotation=annotations.wit_resource_drop(),
            name="close",
            params=[],
            result=generator.type_config.unit_type,
            native=True,
        )
    )

    return generator.render_template(
        "resource.scala.j2",
        generator.template_context(
            docs=generator.render_docs(resource.docs),
            annotation=annotations.wit_resource_import(namespace, resource_name),
            name=scala_name,
            methods=methods,
            members=members,
        ),
    )
