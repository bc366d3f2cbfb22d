"""
Scala code generator implementation.

Generates Scala.js component model bindings from a resolved WIT schema.
"""

from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Optional, Tuple as TupleT, Union

from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator, MalformedSchemaError
from ...core.schema import (
    Alias,
    Enum_,
    FixedList,
    Flags,
    Function,
    Handle,
    InterfaceItem,
    ListKind,
    OptionKind,
    Record,
    RenderContext,
    Resource,
    ResultKind,
    SchemaGraph,
    SchemaType,
    Tuple,
    TypeId,
    UNREPRESENTABLE_KINDS,
    Variant,
    WorldId,
)
from ....logging_config import get_logger
from . import annotations
from .docs import format_docs
from .interface import get_interface_file_path, render_interface
from .naming import create_scala_sanitizer
from .types import ScalaTypeConfig, ScalaTypeMapper
from .world import get_world_file_path, render_world

logger = get_logger(__name__)

# Flags are carried in a single Int
MAX_FLAGS = 32


class ScalaGenerator(CodeGenerator):
    """Code generator for Scala.js component model bindings."""

    def __init__(self, config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None):
        """Initialize Scala generator with configuration."""
        super().__init__(config)

        # Initialize naming
        self.sanitizer = create_scala_sanitizer()

        self.add_comments = self.config.add_comments
        self.indent_size = self.config.indent_size
        self.base_segments = self.config.base_package_segments()

        # Initialize type system
        self.type_config = self._build_type_config()
        self.type_mapper = ScalaTypeMapper(
            self.sanitizer, self.base_segments, self.type_config
        )

    def get_template_directory(self) -> Optional[Path]:
        """Return the Scala templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def _build_type_config(self) -> ScalaTypeConfig:
        """Build ScalaTypeConfig from the custom settings."""
        custom = self.config.custom
        defaults = ScalaTypeConfig()
        return ScalaTypeConfig(
            runtime_package=custom.get("runtime_package", defaults.runtime_package),
            unknown_type=custom.get("unknown_type", defaults.unknown_type),
            list_type=custom.get("list_type", defaults.list_type),
            option_type=custom.get("option_type", defaults.option_type),
        )

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "scala"

    @property
    def file_extension(self) -> str:
        """Return Scala file extension."""
        return ".scala"

    @property
    def tab(self) -> str:
        """One level of indentation."""
        return " " * self.indent_size

    def render_docs(self, docs: Optional[str]) -> str:
        """Format docs as Scaladoc, or nothing when comments are disabled."""
        if not self.add_comments:
            return ""
        return format_docs(docs)

    def template_context(self, **values: Any) -> Dict[str, Any]:
        """Template variables shared by every Scala template, plus ``values``."""
        context = {"tab": self.tab, "indent_size": self.indent_size}
        context.update(values)
        return context

    # World assembly

    def generate(self, graph: SchemaGraph, world_id: WorldId) -> Dict[str, str]:
        """
        Generate binding files for every interface and world item of a world.

        Imported interfaces come first, then exported ones, then the world
        files for world-level types.

        Returns:
            Mapping of relative file path to Scala source, in generation order
        """
        world = graph.world(world_id)
        files: Dict[str, str] = {}
        counts = {True: 0, False: 0}

        for is_import, items in ((True, world.imports), (False, world.exports)):
            for key, item in items.items():
                if not isinstance(item, InterfaceItem):
                    continue

                iface = graph.interface(item.id)
                if not iface.name:
                    raise MalformedSchemaError(
                        f"Interface '{key}' in world '{world.name}' must have a name"
                    )

                namespace = graph.interface_namespace(item.id, fallback=key)
                path = get_interface_file_path(
                    self.sanitizer, self.base_segments, namespace, iface.name, is_import
                )
                logger.debug("Rendering interface %s (%s)", namespace, path)
                files[self._output_path(path)] = render_interface(
                    self, graph, item.id, namespace, is_import
                )
                counts[is_import] += 1

        for is_import in (True, False):
            content = render_world(self, graph, world_id, is_import)
            if content is not None:
                path = get_world_file_path(
                    self.sanitizer, self.base_segments, world.name, is_import
                )
                files[self._output_path(path)] = content

        logger.info(
            "Generated %d Scala files (%d imports, %d exports)",
            len(files),
            counts[True],
            counts[False],
        )
        return files

    def _output_path(self, path: str) -> str:
        if self.config.binding_root:
            return str(PurePosixPath(self.config.binding_root) / path)
        return path

    # Declarations

    def render_typedef(
        self, graph: SchemaGraph, type_id: TypeId, ctx: RenderContext
    ) -> Optional[str]:
        """
        Render a named type definition as a Scala declaration.

        Args:
            graph: Schema graph
            type_id: Type to declare
            ctx: Rendering context of the enclosing interface

        Returns:
            Declaration source, or None for resources and handles which are
            rendered elsewhere
        """
        typedef = graph.type_def(type_id)
        kind = typedef.kind

        if isinstance(kind, (Resource, Handle)):
            return None

        name = self.type_mapper.type_name(graph, type_id)
        docs = self.render_docs(typedef.docs)

        if isinstance(kind, Record):
            return self.render_record(graph, name, kind, docs, ctx)
        elif isinstance(kind, Variant):
            return self.render_variant(graph, name, kind, docs, ctx)
        elif isinstance(kind, Enum_):
            return self.render_enum(name, kind, docs)
        elif isinstance(kind, Flags):
            return self.render_flags(name, kind, docs)
        elif isinstance(
            kind, (Tuple, OptionKind, ResultKind, ListKind, FixedList, Alias)
        ):
            return self.render_alias(graph, type_id, name, docs, ctx)
        elif isinstance(kind, UNREPRESENTABLE_KINDS):
            logger.warning(
                "Type %s has no Scala representation, aliasing it to %s",
                typedef.name,
                self.type_config.unknown_type,
            )
            return self._render_alias_template(name, self.type_config.unknown_type, docs)

        raise MalformedSchemaError(f"Unhandled type kind: {type(kind).__name__}")

    def render_record(
        self,
        graph: SchemaGraph,
        name: str,
        record: Record,
        docs: str,
        ctx: RenderContext,
    ) -> str:
        """Render a record as a final case class."""
        fields = [
            f"{self.sanitizer.to_camel_case(f.name)}: "
            f"{self.type_mapper.render_type(graph, f.type, ctx)}"
            for f in record.fields
        ]
        return self.render_template(
            "record.scala.j2",
            self.template_context(
                docs=docs,
                annotation=annotations.wit_record(),
                name=name,
                fields=fields,
            ),
        )

    def render_variant(
        self,
        graph: SchemaGraph,
        name: str,
        variant: Variant,
        docs: str,
        ctx: RenderContext,
    ) -> str:
        """Render a variant as a sealed trait with one alternative per case."""
        cases = []
        for case in variant.cases:
            case_type = None
            if case.type is not None:
                case_type = self.type_mapper.render_type(graph, case.type, ctx)
            cases.append(
                {"name": self.sanitizer.to_pascal_case(case.name), "type": case_type}
            )
        return self._render_sum_type(name, cases, docs)

    def render_enum(self, name: str, enum: Enum_, docs: str) -> str:
        """Render an enum as a sealed trait of case objects."""
        cases = [
            {"name": self.sanitizer.to_pascal_case(case), "type": None}
            for case in enum.cases
        ]
        return self._render_sum_type(name, cases, docs)

    def _render_sum_type(self, name: str, cases: List[Dict[str, Any]], docs: str) -> str:
        return self.render_template(
            "variant.scala.j2",
            self.template_context(
                docs=docs,
                annotation=annotations.wit_variant(),
                name=name,
                cases=cases,
            ),
        )

    def render_flags(self, name: str, flags: Flags, docs: str) -> str:
        """
        Render flags as an Int wrapper with bitwise operators.

        Each flag gets a constant at ``1 << index`` in declaration order.

        Raises:
            MalformedSchemaError: If there are more flags than bits in an Int
        """
        if len(flags.flags) > MAX_FLAGS:
            raise MalformedSchemaError(
                f"Flags {name} has {len(flags.flags)} flags, "
                f"at most {MAX_FLAGS} fit in an Int"
            )
        return self.render_template(
            "flags.scala.j2",
            self.template_context(
                docs=docs,
                annotation=annotations.wit_flags(len(flags.flags)),
                name=name,
                flags=[self.sanitizer.to_camel_case(flag) for flag in flags.flags],
            ),
        )

    def render_alias(
        self,
        graph: SchemaGraph,
        type_id: TypeId,
        name: str,
        docs: str,
        ctx: RenderContext,
    ) -> str:
        """Render a named tuple, option, result, list or plain alias."""
        kind = graph.type_def(type_id).kind
        if isinstance(kind, Alias):
            target = self.type_mapper.render_type(graph, kind.inner, ctx)
        else:
            target = self.type_mapper.render_type(graph, type_id, ctx)

        suffix = f" // Fixed size: {kind.size}" if isinstance(kind, FixedList) else ""
        return self._render_alias_template(name, target, docs, suffix)

    def _render_alias_template(
        self, name: str, target: str, docs: str, suffix: str = ""
    ) -> str:
        return self.render_template(
            "alias.scala.j2",
            self.template_context(docs=docs, name=name, target=target, suffix=suffix),
        )

    # Functions

    def render_params(
        self,
        graph: SchemaGraph,
        params: List[TupleT[str, SchemaType]],
        ctx: RenderContext,
    ) -> List[str]:
        """Render ``name: Type`` parameter declarations in order."""
        return [
            f"{self.sanitizer.to_camel_case(param)}: "
            f"{self.type_mapper.render_type(graph, ty, ctx)}"
            for param, ty in params
        ]

    def render_function(
        self,
        graph: SchemaGraph,
        func: Function,
        is_import: bool,
        namespace: str,
        ctx: RenderContext,
    ) -> str:
        """
        Render an annotated function signature.

        Imports are bound by the runtime and end in the native marker;
        exports are bodiless signatures the embedding application implements.

        Args:
            graph: Schema graph
            func: Function to render
            is_import: Import mode when True, export mode otherwise
            namespace: WIT namespace the function is bound under
            ctx: Rendering context of the owning interface
        """
        if is_import:
            annotation = annotations.wit_import(namespace, func.name)
        else:
            annotation = annotations.wit_export(namespace, func.name)

        return self.render_signature(graph, func, annotation, ctx, native=is_import)

    def render_signature(
        self,
        graph: SchemaGraph,
        func: Function,
        annotation: str,
        ctx: RenderContext,
        name: Optional[str] = None,
        result: Optional[str] = None,
        native: bool = True,
    ) -> str:
        """
        Render a function with the given annotation.

        ``name`` and ``result`` override the cased WIT name and the rendered
        result type, as constructors need.
        """
        return self.render_def(
            docs=self.render_docs(func.docs),
            annotation=annotation,
            name=name or self.sanitizer.to_camel_case(func.name),
            params=self.render_params(graph, func.params, ctx),
            result=result or self.type_mapper.render_optional(graph, func.result, ctx),
            native=native,
        )

    def render_def(
        self,
        docs: str,
        annotation: str,
        name: str,
        params: List[str],
        result: str,
        native: bool,
    ) -> str:
        """Render a single annotated ``def`` from already rendered parts."""
        body = f" = {annotations.NATIVE_MARKER}" if native else ""
        return self.render_template(
            "function.scala.j2",
            self.template_context(
                docs=docs,
                annotation=annotation,
                name=name,
                params=params,
                result=result,
                body=body,
            ),
        )


def create_scala_generator(config: Optional[Dict[str, Any]] = None) -> ScalaGenerator:
    """Create a Scala generator with default configuration."""
    return ScalaGenerator(config)
