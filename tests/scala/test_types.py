import pytest

from wit_scala.codegen.core.generator import MalformedSchemaError
from wit_scala.codegen.core.schema import (
    Alias,
    FixedList,
    Future,
    Handle,
    HandleMode,
    ListKind,
    OptionKind,
    PrimitiveKind,
    Record,
    RenderContext,
    Resource,
    ResultKind,
    SchemaGraph,
    Stream,
    Tuple,
    TypeId,
    Unknown,
)
from wit_scala.codegen.languages.scala.types import ScalaTypeConfig, ScalaTypeMapper

NO_CONTEXT = RenderContext()


@pytest.fixture
def mapper() -> ScalaTypeMapper:
    return ScalaTypeMapper(base_segments=["com", "example"])


@pytest.fixture
def graph() -> SchemaGraph:
    return SchemaGraph()


# ###############
# Primitives
# ###############


@pytest.mark.parametrize(
    "kind,expected",
    [
        (PrimitiveKind.BOOL, "Boolean"),
        (PrimitiveKind.S8, "Byte"),
        (PrimitiveKind.U8, "scala.scalajs.wit.unsigned.UByte"),
        (PrimitiveKind.S16, "Short"),
        (PrimitiveKind.U16, "scala.scalajs.wit.unsigned.UShort"),
        (PrimitiveKind.S32, "Int"),
        (PrimitiveKind.U32, "scala.scalajs.wit.unsigned.UInt"),
        (PrimitiveKind.S64, "Long"),
        (PrimitiveKind.U64, "scala.scalajs.wit.unsigned.ULong"),
        (PrimitiveKind.F32, "Float"),
        (PrimitiveKind.F64, "Double"),
        (PrimitiveKind.CHAR, "Char"),
        (PrimitiveKind.STRING, "String"),
    ],
)
def test_render_primitive(mapper, kind, expected):
    assert mapper.render_primitive(kind) == expected


def test_primitive_renderings_are_distinct(mapper):
    rendered = {mapper.render_primitive(kind) for kind in PrimitiveKind}
    assert len(rendered) == len(PrimitiveKind)


def test_render_primitive_rejects_references(mapper):
    with pytest.raises(ValueError):
        mapper.render_primitive(TypeId(0))


def test_runtime_package_is_configurable(graph):
    mapper = ScalaTypeMapper(config=ScalaTypeConfig(runtime_package="my.rt"))
    assert mapper.render_primitive(PrimitiveKind.U32) == "my.rt.unsigned.UInt"
    result = graph.add_type(ResultKind(ok=PrimitiveKind.S32))
    assert mapper.render_type(graph, result, NO_CONTEXT) == "my.rt.Result[Int, Unit]"


# ###############
# Containers
# ###############


class TestContainers:
    def test_list(self, mapper, graph):
        ty = graph.add_type(ListKind(PrimitiveKind.STRING))
        assert mapper.render_type(graph, ty, NO_CONTEXT) == "Array[String]"

    def test_fixed_list_drops_size(self, mapper, graph):
        ty = graph.add_type(FixedList(PrimitiveKind.U8, 16))
        assert (
            mapper.render_type(graph, ty, NO_CONTEXT)
            == "Array[scala.scalajs.wit.unsigned.UByte]"
        )

    def test_option(self, mapper, graph):
        ty = graph.add_type(OptionKind(PrimitiveKind.S32))
        assert mapper.render_type(graph, ty, NO_CONTEXT) == "java.util.Optional[Int]"

    def test_nested(self, mapper, graph):
        inner = graph.add_type(ListKind(PrimitiveKind.S32))
        ty = graph.add_type(OptionKind(inner))
        assert mapper.render_type(graph, ty, NO_CONTEXT) == "java.util.Optional[Array[Int]]"

    @pytest.mark.parametrize(
        "ok,err,expected",
        [
            (PrimitiveKind.S32, PrimitiveKind.STRING, "Result[Int, String]"),
            (PrimitiveKind.S32, None, "Result[Int, Unit]"),
            (None, PrimitiveKind.STRING, "Result[Unit, String]"),
            (None, None, "Result[Unit, Unit]"),
        ],
    )
    def test_result(self, mapper, graph, ok, err, expected):
        ty = graph.add_type(ResultKind(ok=ok, err=err))
        assert mapper.render_type(graph, ty, NO_CONTEXT) == f"scala.scalajs.wit.{expected}"

    def test_tuple(self, mapper, graph):
        ty = graph.add_type(Tuple([PrimitiveKind.S32, PrimitiveKind.STRING, PrimitiveKind.BOOL]))
        assert (
            mapper.render_type(graph, ty, NO_CONTEXT)
            == "scala.scalajs.wit.Tuple3[Int, String, Boolean]"
        )

    @pytest.mark.parametrize("kind", [Future(PrimitiveKind.S32), Stream(), Unknown()])
    def test_unrepresentable(self, mapper, graph, kind):
        ty = graph.add_type(kind)
        assert mapper.render_type(graph, ty, NO_CONTEXT) == "Unknown"

    def test_render_optional(self, mapper, graph):
        assert mapper.render_optional(graph, None, NO_CONTEXT) == "Unit"
        assert mapper.render_optional(graph, PrimitiveKind.F64, NO_CONTEXT) == "Double"


# ###############
# Named types and qualification
# ###############


class TestNamedTypes:
    def test_record_uses_pascal_name(self, mapper, graph):
        iface = graph.add_interface("types")
        ty = graph.add_type(Record(), "http-request", iface)
        ctx = RenderContext.for_interface(iface)
        assert mapper.render_type(graph, ty, ctx) == "HttpRequest"

    def test_handles_render_as_resource(self, mapper, graph):
        iface = graph.add_interface("types")
        resource = graph.add_type(Resource(), "file", iface)
        own = graph.add_type(Handle(resource, HandleMode.OWN))
        borrow = graph.add_type(Handle(resource, HandleMode.BORROW))
        ctx = RenderContext.for_interface(iface)
        assert mapper.render_type(graph, own, ctx) == "File"
        assert mapper.render_type(graph, borrow, ctx) == "File"

    def test_alias_is_transparent(self, mapper, graph):
        alias = graph.add_type(Alias(PrimitiveKind.STRING), "name")
        assert mapper.render_type(graph, alias, NO_CONTEXT) == "String"

    def test_unnamed_record_is_malformed(self, mapper, graph):
        ty = graph.add_type(Record())
        with pytest.raises(MalformedSchemaError, match="must have a name"):
            mapper.render_type(graph, ty, NO_CONTEXT)

    def test_qualified_from_other_interface(self, mapper, io_schema):
        ctx = RenderContext.for_interface(io_schema.streams_iface)
        assert (
            mapper.render_type(io_schema.graph, io_schema.error_info, ctx)
            == "com.example.wasi.io.error.ErrorInfo"
        )

    def test_qualified_through_use_alias(self, mapper, io_schema):
        ctx = RenderContext.for_interface(io_schema.streams_iface)
        assert (
            mapper.render_type(io_schema.graph, io_schema.used_error, ctx)
            == "com.example.wasi.io.error.ErrorInfo"
        )

    def test_bare_inside_owner(self, mapper, io_schema):
        ctx = RenderContext.for_interface(io_schema.error_iface)
        assert mapper.render_type(io_schema.graph, io_schema.error_info, ctx) == "ErrorInfo"

    def test_bare_without_context(self, mapper, io_schema):
        assert (
            mapper.render_type(io_schema.graph, io_schema.error_info, NO_CONTEXT)
            == "ErrorInfo"
        )

    def test_bare_when_owner_has_no_package(self, mapper, graph):
        local = graph.add_interface("local")
        other = graph.add_interface("other")
        ty = graph.add_type(Record(), "thing", local)
        ctx = RenderContext.for_interface(other)
        assert mapper.render_type(graph, ty, ctx) == "Thing"

    def test_same_name_different_interface_is_qualified(self, mapper, graph):
        """Sameness is decided by interface identity, not by name."""
        package = graph.add_package("acme", "shop")
        first = graph.add_interface("types", package)
        second = graph.add_interface("types", package)
        ty = graph.add_type(Record(), "item", first)
        ctx = RenderContext.for_interface(second)
        assert mapper.render_type(graph, ty, ctx) == "com.example.acme.shop.types.Item"

    def test_mapper_keeps_no_state_between_calls(self, mapper, io_schema):
        streams = RenderContext.for_interface(io_schema.streams_iface)
        error = RenderContext.for_interface(io_schema.error_iface)
        graph = io_schema.graph
        assert mapper.render_type(graph, io_schema.error_info, streams) != mapper.render_type(
            graph, io_schema.error_info, error
        )
        assert mapper.render_type(graph, io_schema.error_info, streams).endswith(".ErrorInfo")
