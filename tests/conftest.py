"""Shared schema fixtures for the test suite."""

from types import SimpleNamespace

import pytest

from wit_scala.codegen.core.schema import (
    Alias,
    Case,
    Function,
    FunctionKind,
    Handle,
    HandleMode,
    InterfaceItem,
    PrimitiveKind,
    Record,
    RecordField,
    Resource,
    SchemaGraph,
    Variant,
)
from wit_scala.codegen.languages.scala import ScalaGenerator

S32 = PrimitiveKind.S32
STRING = PrimitiveKind.STRING


# ###############
# Generators
# ###############


@pytest.fixture
def generator() -> ScalaGenerator:
    """Generator with the package prefix used throughout the tests."""
    return ScalaGenerator({"base_package": "com.example.test"})


# ###############
# Schemas
# ###############


@pytest.fixture
def simple_schema() -> SimpleNamespace:
    """Interface ``simple`` with record ``point`` and function ``add``."""
    graph = SchemaGraph()
    package = graph.add_package("test", "simple")
    iface = graph.add_interface("simple", package)
    point = graph.add_type(
        Record([RecordField("x", S32), RecordField("y", S32)]), "point", iface
    )
    add = graph.add_function(iface, Function("add", [("a", S32), ("b", S32)], S32))

    world = graph.add_world("simple-world", package)
    graph.world(world).imports["test:simple/simple"] = InterfaceItem(iface)

    return SimpleNamespace(
        graph=graph, package=package, interface=iface, point=point, add=add, world=world
    )


@pytest.fixture
def outcome_schema() -> SimpleNamespace:
    """Interface ``results`` with variant ``outcome{ok(string), err(string)}``."""
    graph = SchemaGraph()
    package = graph.add_package("test", "results")
    iface = graph.add_interface("results", package)
    outcome = graph.add_type(
        Variant([Case("ok", STRING), Case("err", STRING)]), "outcome", iface
    )
    return SimpleNamespace(graph=graph, interface=iface, outcome=outcome)


@pytest.fixture
def counter_schema() -> SimpleNamespace:
    """Interface ``counters`` with resource ``counter``."""
    graph = SchemaGraph()
    package = graph.add_package("test", "counter")
    iface = graph.add_interface("counters", package)
    counter = graph.add_type(Resource(), "counter", iface)
    own_counter = graph.add_type(Handle(counter, HandleMode.OWN))

    graph.add_function(
        iface,
        Function(
            "constructor",
            [("initial", S32)],
            own_counter,
            FunctionKind.CONSTRUCTOR,
            counter,
        ),
    )
    graph.add_function(
        iface, Function("increment", [], None, FunctionKind.METHOD, counter)
    )
    graph.add_function(iface, Function("value", [], S32, FunctionKind.METHOD, counter))

    world = graph.add_world("counter-world", package)
    graph.world(world).imports["test:counter/counters"] = InterfaceItem(iface)

    return SimpleNamespace(
        graph=graph,
        package=package,
        interface=iface,
        counter=counter,
        own_counter=own_counter,
        world=world,
    )


@pytest.fixture
def io_schema() -> SimpleNamespace:
    """
    Package ``wasi:io@0.2.0`` with interfaces ``error`` and ``streams``.

    ``streams`` uses ``error-info`` from ``error`` through an alias and a
    record field, so its renderings need qualified names.
    """
    graph = SchemaGraph()
    package = graph.add_package("wasi", "io", "0.2.0")
    error_iface = graph.add_interface("error", package)
    streams_iface = graph.add_interface("streams", package)

    error_info = graph.add_type(
        Record([RecordField("code", S32)]), "error-info", error_iface
    )
    used_error = graph.add_type(Alias(error_info), "error-info", streams_iface)
    chunk = graph.add_type(
        Record([RecordField("data", STRING), RecordField("error", used_error)]),
        "chunk",
        streams_iface,
    )
    graph.add_function(
        streams_iface, Function("last-error", [], error_info)
    )

    world = graph.add_world("proxy", package)
    graph.world(world).imports["wasi:io/error@0.2.0"] = InterfaceItem(error_iface)
    graph.world(world).imports["wasi:io/streams@0.2.0"] = InterfaceItem(streams_iface)

    return SimpleNamespace(
        graph=graph,
        package=package,
        error_iface=error_iface,
        streams_iface=streams_iface,
        error_info=error_info,
        used_error=used_error,
        chunk=chunk,
        world=world,
    )
