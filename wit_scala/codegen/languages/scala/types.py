"""
Scala-specific type system for code generation.

Maps WIT primitives and type expressions to Scala type strings, qualifying
references to types that live in another interface.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from ...core.generator import MalformedSchemaError
from ...core.naming import NameSanitizer
from ...core.schema import (
    Alias,
    FixedList,
    Future,
    Handle,
    ListKind,
    NAMED_KINDS,
    OptionKind,
    PrimitiveKind,
    RenderContext,
    ResultKind,
    SchemaGraph,
    SchemaType,
    Stream,
    Tuple,
    TypeId,
    Unknown,
)
from .naming import create_scala_sanitizer


@dataclass
class ScalaTypeConfig:
    """Configuration for Scala type mapping behavior."""

    # Package holding the unsigned, Result and TupleN wrappers
    runtime_package: str = "scala.scalajs.wit"

    # Placeholder for types with no Scala representation
    unknown_type: str = "Unknown"

    # Container types
    list_type: str = "Array"
    option_type: str = "java.util.Optional"

    # Missing result sides and absent return types
    unit_type: str = "Unit"


class ScalaTypeMapper:
    """
    Central engine for mapping WIT types to Scala type expressions.

    The mapper holds no per-render state: the interface currently being
    rendered travels in the ``RenderContext`` passed to every call.
    """

    def __init__(
        self,
        sanitizer: Optional[NameSanitizer] = None,
        base_segments: Optional[List[str]] = None,
        config: Optional[ScalaTypeConfig] = None,
    ):
        """
        Initialize the type mapper.

        Args:
            sanitizer: Name sanitizer used for type and package names
            base_segments: Base package segments prefixed to qualified names
            config: Type mapping configuration
        """
        self.sanitizer = sanitizer or create_scala_sanitizer()
        self.base_segments = list(base_segments or [])
        self.config = config or ScalaTypeConfig()
        self._primitive_types = self._build_primitive_type_map()

    def _build_primitive_type_map(self) -> Dict[PrimitiveKind, str]:
        """Build mapping of WIT primitives to Scala types."""
        unsigned = f"{self.config.runtime_package}.unsigned"
        return {
            PrimitiveKind.BOOL: "Boolean",
            PrimitiveKind.S8: "Byte",
            PrimitiveKind.U8: f"{unsigned}.UByte",
            PrimitiveKind.S16: "Short",
            PrimitiveKind.U16: f"{unsigned}.UShort",
            PrimitiveKind.S32: "Int",
            PrimitiveKind.U32: f"{unsigned}.UInt",
            PrimitiveKind.S64: "Long",
            PrimitiveKind.U64: f"{unsigned}.ULong",
            PrimitiveKind.F32: "Float",
            PrimitiveKind.F64: "Double",
            PrimitiveKind.CHAR: "Char",
            PrimitiveKind.STRING: "String",
        }

    def render_primitive(self, kind: PrimitiveKind) -> str:
        """
        Map a primitive kind to its Scala type.

        Unsigned integers map to the runtime's wrapper types since Scala has
        no native unsigned numbers.

        Raises:
            ValueError: If ``kind`` is not a primitive
        """
        if not isinstance(kind, PrimitiveKind):
            raise ValueError(f"Not a primitive type: {kind!r}")
        return self._primitive_types[kind]

    def render_type(self, graph: SchemaGraph, ty: SchemaType, ctx: RenderContext) -> str:
        """
        Render any schema type as a Scala type expression.

        Args:
            graph: Schema graph the type belongs to
            ty: Primitive kind or type reference
            ctx: Rendering context deciding qualification

        Returns:
            Scala type expression
        """
        if isinstance(ty, PrimitiveKind):
            return self.render_primitive(ty)
        if isinstance(ty, TypeId):
            return self._render_type_id(graph, ty, ctx)
        raise ValueError(f"Not a schema type: {ty!r}")

    def render_optional(
        self, graph: SchemaGraph, ty: Optional[SchemaType], ctx: RenderContext
    ) -> str:
        """Render a type that may be absent, falling back to ``Unit``."""
        if ty is None:
            return self.config.unit_type
        return self.render_type(graph, ty, ctx)

    def _render_type_id(self, graph: SchemaGraph, type_id: TypeId, ctx: RenderContext) -> str:
        typedef = graph.type_def(type_id)
        kind = typedef.kind
        runtime = self.config.runtime_package

        if isinstance(kind, (ListKind, FixedList)):
            # Fixed size is documentary only
            inner = self.render_type(graph, kind.inner, ctx)
            return f"{self.config.list_type}[{inner}]"

        elif isinstance(kind, OptionKind):
            inner = self.render_type(graph, kind.inner, ctx)
            return f"{self.config.option_type}[{inner}]"

        elif isinstance(kind, ResultKind):
            ok = self.render_optional(graph, kind.ok, ctx)
            err = self.render_optional(graph, kind.err, ctx)
            return f"{runtime}.Result[{ok}, {err}]"

        elif isinstance(kind, Tuple):
            params = [self.render_type(graph, t, ctx) for t in kind.types]
            return f"{runtime}.Tuple{len(params)}[{', '.join(params)}]"

        elif isinstance(kind, NAMED_KINDS):
            return self.qualified_name(graph, type_id, ctx)

        elif isinstance(kind, Handle):
            # own and borrow share one representation
            return self.qualified_name(graph, kind.resource, ctx)

        elif isinstance(kind, Alias):
            return self.render_type(graph, kind.inner, ctx)

        elif isinstance(kind, (Future, Stream, Unknown)):
            return self.config.unknown_type

        raise MalformedSchemaError(f"Unhandled type kind: {type(kind).__name__}")

    def type_name(self, graph: SchemaGraph, type_id: TypeId) -> str:
        """
        Return the PascalCase Scala name of a named type.

        Raises:
            MalformedSchemaError: If the type has no name
        """
        typedef = graph.type_def(type_id)
        if not typedef.name:
            raise MalformedSchemaError(
                f"{type(typedef.kind).__name__.rstrip('_')} type #{type_id.index} "
                f"must have a name"
            )
        return self.sanitizer.to_pascal_case(typedef.name)

    def qualified_name(self, graph: SchemaGraph, type_id: TypeId, ctx: RenderContext) -> str:
        """
        Name a type, qualifying it when it belongs to another interface.

        Sameness is decided by interface identity, never by name. Without a
        current interface, or when the owner has no package, the bare name
        is used.
        """
        name = self.type_name(graph, type_id)
        owner = graph.type_def(type_id).owner

        if owner is None or ctx.current_interface is None:
            return name
        if owner == ctx.current_interface:
            return name

        iface = graph.interface(owner)
        if iface.package is None:
            return name
        if not iface.name:
            raise MalformedSchemaError(
                f"Interface #{owner.index} owning type {name} must have a name"
            )

        package = graph.package(iface.package)
        segments = list(self.base_segments)
        segments.append(self.sanitizer.to_snake_case(package.namespace))
        segments.append(self.sanitizer.to_snake_case(package.name))
        segments.append(self.sanitizer.to_snake_case(iface.name))
        segments.append(name)
        return ".".join(segments)
