import pytest

from wit_scala.codegen.core.generator import (
    MalformedSchemaError,
    UnsupportedCapabilityError,
)
from wit_scala.codegen.core.schema import (
    Function,
    FunctionKind,
    PrimitiveKind,
    Record,
    RenderContext,
    Resource,
    SchemaGraph,
)
from wit_scala.codegen.languages.scala import render_resource
from wit_scala.codegen.languages.scala.resource import check_resource_function

NAMESPACE = "test:counter/counters"


def render_counter(generator, schema, is_import=True):
    ctx = RenderContext.for_interface(schema.interface)
    return render_resource(
        generator, schema.graph, schema.counter, NAMESPACE, is_import, ctx
    )


# ###############
# Import rendering
# ###############


class TestImportedResource:
    def test_counter(self, generator, counter_schema):
        assert render_counter(generator, counter_schema) == (
            '@scala.scalajs.wit.annotation.WitResourceImport("test:counter/counters", "counter")\n'
            "trait Counter {\n"
            '  @scala.scalajs.wit.annotation.WitResourceMethod("increment")\n'
            "  def increment(): Unit = scala.scalajs.wit.native\n"
            '  @scala.scalajs.wit.annotation.WitResourceMethod("value")\n'
            "  def value(): Int = scala.scalajs.wit.native\n"
            "  @scala.scalajs.wit.annotation.WitResourceDrop\n"
            "  def close(): Unit = scala.scalajs.wit.native\n"
            "}\n"
            "object Counter {\n"
            "  @scala.scalajs.wit.annotation.WitResourceConstructor\n"
            "  def apply(initial: Int): Counter = scala.scalajs.wit.native\n"
            "}\n"
        )

    def test_static_methods_go_to_companion(self, generator, counter_schema):
        counter_schema.graph.add_function(
            counter_schema.interface,
            Function(
                "zero", [], counter_schema.own_counter, FunctionKind.STATIC,
                counter_schema.counter,
            ),
        )
        rendered = render_counter(generator, counter_schema)
        companion = rendered[rendered.index("object Counter {"):]
        assert '  @scala.scalajs.wit.annotation.WitResourceStaticMethod("zero")\n' in companion
        assert "  def zero(): Counter = scala.scalajs.wit.native\n" in companion

    def test_companion_follows_declaration_order(self, generator, counter_schema):
        functions = counter_schema.graph.interface(counter_schema.interface).functions
        declared = dict(functions)
        functions.clear()
        counter_schema.graph.add_function(
            counter_schema.interface,
            Function(
                "zero", [], counter_schema.own_counter, FunctionKind.STATIC,
                counter_schema.counter,
            ),
        )
        functions.update(declared)

        rendered = render_counter(generator, counter_schema)
        companion = rendered[rendered.index("object Counter {"):]
        assert companion.index("def zero()") < companion.index("def apply(")

    def test_resource_without_functions(self, generator):
        graph = SchemaGraph()
        iface = graph.add_interface("handles", graph.add_package("test", "bare"))
        token = graph.add_type(Resource(), "token", iface)
        rendered = render_resource(
            generator, graph, token, "test:bare/handles", True,
            RenderContext.for_interface(iface),
        )
        assert "trait Token {\n  @scala.scalajs.wit.annotation.WitResourceDrop\n" in rendered
        assert rendered.endswith("object Token {\n}\n")

    def test_method_docs_are_indented(self, generator, counter_schema):
        functions = counter_schema.graph.interface(counter_schema.interface).functions
        functions["[method]counter.increment"].docs = "Adds one."
        rendered = render_counter(generator, counter_schema)
        assert "  /** Adds one.\n   */\n  @scala" in rendered

    def test_method_names_are_cased(self, generator, counter_schema):
        counter_schema.graph.add_function(
            counter_schema.interface,
            Function(
                "get-value", [], PrimitiveKind.S32, FunctionKind.METHOD,
                counter_schema.counter,
            ),
        )
        rendered = render_counter(generator, counter_schema)
        assert '@scala.scalajs.wit.annotation.WitResourceMethod("get-value")\n' in rendered
        assert "  def getValue(): Int = scala.scalajs.wit.native\n" in rendered


# ###############
# Failures
# ###############


class TestResourceErrors:
    def test_export_is_unsupported(self, generator, counter_schema):
        with pytest.raises(UnsupportedCapabilityError) as excinfo:
            render_counter(generator, counter_schema, is_import=False)

        error = excinfo.value
        assert error.resource_name == "counter"
        assert error.interface_name == "counters"
        assert "cannot be exported" in str(error)

    def test_two_constructors(self, generator, counter_schema):
        functions = counter_schema.graph.interface(counter_schema.interface).functions
        functions["[constructor]counter#2"] = Function(
            "constructor", [], None, FunctionKind.CONSTRUCTOR, counter_schema.counter
        )
        with pytest.raises(MalformedSchemaError, match="2 constructors"):
            render_counter(generator, counter_schema)

    def test_not_a_resource(self, generator, simple_schema):
        with pytest.raises(MalformedSchemaError, match="not a resource"):
            render_resource(
                generator,
                simple_schema.graph,
                simple_schema.point,
                "test:simple/simple",
                True,
                RenderContext.for_interface(simple_schema.interface),
            )


class TestCheckResourceFunction:
    def test_freestanding_passes(self, simple_schema):
        check_resource_function(
            simple_schema.graph, simple_schema.add, simple_schema.interface
        )

    def test_method_without_resource(self, counter_schema):
        func = Function("orphan", kind=FunctionKind.METHOD)
        with pytest.raises(MalformedSchemaError, match="does not name its resource"):
            check_resource_function(counter_schema.graph, func, counter_schema.interface)

    def test_method_on_record(self):
        graph = SchemaGraph()
        iface = graph.add_interface("types")
        point = graph.add_type(Record(), "point", iface)
        func = Function("length", kind=FunctionKind.METHOD, resource=point)
        with pytest.raises(MalformedSchemaError, match="record 'point'"):
            check_resource_function(graph, func, iface)

    def test_resource_from_other_interface(self, counter_schema):
        graph = counter_schema.graph
        other = graph.add_interface("other")
        func = Function("peek", kind=FunctionKind.METHOD, resource=counter_schema.counter)
        with pytest.raises(MalformedSchemaError, match="another interface"):
            check_resource_function(graph, func, other)
