"""
Convert resolver JSON into the internal schema graph.

Accepts the document printed by ``wasm-tools component wit --json``:
top-level ``packages``, ``interfaces``, ``types`` and ``worlds`` arrays
whose entries cross-reference each other by index. Primitive types are
spelled as strings, type references as integer indices.
"""

import re
from typing import Any, Dict, List, Optional

from .schema import (
    Alias,
    Case,
    Enum_,
    Flags,
    FixedList,
    Function,
    FunctionItem,
    FunctionKind,
    Future,
    Handle,
    HandleMode,
    InterfaceId,
    InterfaceItem,
    ListKind,
    OptionKind,
    Package,
    PackageId,
    PrimitiveKind,
    Record,
    RecordField,
    Resource,
    ResultKind,
    SchemaGraph,
    SchemaType,
    Stream,
    Tuple,
    TypeDef,
    TypeId,
    TypeItem,
    Unknown,
    Variant,
    World,
    WorldId,
    WorldItem,
)


class SchemaLoadError(Exception):
    """Exception raised when resolver output cannot be converted."""

    pass


# Older resolver releases spell the float widths out
PRIMITIVE_ALIASES = {
    "float32": PrimitiveKind.F32,
    "float64": PrimitiveKind.F64,
}

PACKAGE_NAME_PATTERN = re.compile(
    r"^(?P<namespace>[^:]+):(?P<name>[^@/]+)(?:@(?P<version>.+))?$"
)

RESOURCE_FUNCTION_PATTERN = re.compile(
    r"^\[(?:async )?(?:method|static)\][^.]+\.(?P<name>.+)$"
)


def convert_resolve(data: Dict[str, Any]) -> SchemaGraph:
    """
    Convert a resolver JSON document into a SchemaGraph.

    Args:
        data: Parsed JSON document

    Returns:
        Schema graph with the same table order as the document

    Raises:
        SchemaLoadError: If the document does not have the expected shape
    """
    if not isinstance(data, dict):
        raise SchemaLoadError("Resolver output must be a JSON object")

    graph = SchemaGraph()
    try:
        for package_data in data.get("packages", []):
            graph.packages.append(_convert_package(package_data))

        # Interfaces first so that type owners can be resolved by index
        interfaces_data = data.get("interfaces", [])
        for interface_data in interfaces_data:
            package = interface_data.get("package")
            graph.add_interface(
                interface_data.get("name"),
                PackageId(package) if package is not None else None,
                _docs(interface_data),
            )

        types_data = data.get("types", [])
        converter = _TypeConverter(graph, len(types_data))
        for type_data in types_data:
            graph.types.append(converter.convert_typedef(type_data))
        converter.flush_synthetic()

        for index, interface_data in enumerate(interfaces_data):
            iface = graph.interfaces[index]
            for name, type_index in interface_data.get("types", {}).items():
                iface.types[name] = TypeId(type_index)
            for key, function_data in interface_data.get("functions", {}).items():
                iface.functions[key] = converter.convert_function(function_data)

        for world_data in data.get("worlds", []):
            graph.worlds.append(_convert_world(world_data, converter))
        converter.flush_synthetic()
    except SchemaLoadError:
        raise
    except (
        AttributeError,
        IndexError,
        KeyError,
        StopIteration,
        TypeError,
        ValueError,
    ) as e:
        raise SchemaLoadError(f"Malformed resolver output: {e}") from e

    return graph


def select_world(graph: SchemaGraph, name: Optional[str] = None) -> WorldId:
    """
    Pick the world to generate.

    Without a name the document must contain exactly one world.

    Raises:
        SchemaLoadError: If the world is missing or the choice is ambiguous
    """
    if name is not None:
        world_id = graph.find_world(name)
        if world_id is None:
            available = ", ".join(world.name for world in graph.worlds) or "none"
            raise SchemaLoadError(f"World not found: {name} (available: {available})")
        return world_id

    if len(graph.worlds) != 1:
        raise SchemaLoadError(
            f"Expected exactly one world, found {len(graph.worlds)}; pick one by name"
        )
    return WorldId(0)


def _docs(data: Dict[str, Any]) -> Optional[str]:
    docs = data.get("docs") or {}
    if isinstance(docs, str):
        return docs
    return docs.get("contents")


def _convert_package(data: Dict[str, Any]) -> Package:
    name = data["name"]
    match = PACKAGE_NAME_PATTERN.match(name)
    if not match:
        raise SchemaLoadError(f"Invalid package name: {name}")
    return Package(
        namespace=match.group("namespace"),
        name=match.group("name"),
        version=match.group("version"),
        docs=_docs(data),
    )


def _convert_world(data: Dict[str, Any], converter: "_TypeConverter") -> World:
    package = data.get("package")
    world = World(
        name=data["name"],
        package=PackageId(package) if package is not None else None,
        docs=_docs(data),
    )
    for key, item in data.get("imports", {}).items():
        world.imports[key] = _convert_world_item(item, converter)
    for key, item in data.get("exports", {}).items():
        world.exports[key] = _convert_world_item(item, converter)
    return world


def _convert_world_item(data: Dict[str, Any], converter: "_TypeConverter") -> WorldItem:
    if "interface" in data:
        target = data["interface"]
        if isinstance(target, dict):
            target = target["id"]
        return InterfaceItem(InterfaceId(target))
    if "function" in data:
        return FunctionItem(converter.convert_function(data["function"]))
    if "type" in data:
        return TypeItem(TypeId(data["type"]))
    raise SchemaLoadError(f"Unknown world item: {sorted(data)}")


class _TypeConverter:
    """Converts type, typedef and function payloads."""

    def __init__(self, graph: SchemaGraph, type_count: int):
        self.graph = graph
        self.type_count = type_count
        self._synthetic: List[TypeDef] = []
        self._error_context: Optional[TypeId] = None

    def convert_type(self, value: Any) -> SchemaType:
        if isinstance(value, bool):
            raise SchemaLoadError(f"Invalid type reference: {value!r}")
        if isinstance(value, int):
            return TypeId(value)
        if isinstance(value, str):
            if value in PRIMITIVE_ALIASES:
                return PRIMITIVE_ALIASES[value]
            if value == "error-context":
                return self._error_context_type()
            try:
                return PrimitiveKind(value)
            except ValueError:
                raise SchemaLoadError(f"Unknown primitive type: {value}")
        raise SchemaLoadError(f"Invalid type reference: {value!r}")

    def convert_optional_type(self, value: Any) -> Optional[SchemaType]:
        return None if value is None else self.convert_type(value)

    def _error_context_type(self) -> TypeId:
        # error-context has no Scala counterpart; model it as an anonymous unknown
        if self._error_context is None:
            # Synthesized entries are appended right after the resolver types
            self._synthetic.append(TypeDef(kind=Unknown()))
            self._error_context = TypeId(self.type_count)
        return self._error_context

    def flush_synthetic(self) -> None:
        """Append synthesized type definitions after the resolver's own."""
        self.graph.types.extend(self._synthetic)
        self._synthetic = []

    def convert_typedef(self, data: Dict[str, Any]) -> TypeDef:
        owner = data.get("owner")
        owner_id = None
        if isinstance(owner, dict) and "interface" in owner:
            owner_id = InterfaceId(owner["interface"])

        return TypeDef(
            kind=self.convert_kind(data["kind"]),
            name=data.get("name"),
            owner=owner_id,
            docs=_docs(data),
        )

    def convert_kind(self, kind: Any):
        if isinstance(kind, str):
            if kind == "resource":
                return Resource()
            if kind == "unknown":
                return Unknown()
            raise SchemaLoadError(f"Unknown type kind: {kind}")

        if not isinstance(kind, dict) or len(kind) != 1:
            raise SchemaLoadError(f"Invalid type kind: {kind!r}")

        tag, payload = next(iter(kind.items()))
        if tag == "record":
            return Record(
                fields=[
                    RecordField(
                        name=f["name"],
                        type=self.convert_type(f["type"]),
                        docs=_docs(f),
                    )
                    for f in payload["fields"]
                ]
            )
        if tag == "variant":
            return Variant(
                cases=[
                    Case(
                        name=c["name"],
                        type=self.convert_optional_type(c.get("type")),
                        docs=_docs(c),
                    )
                    for c in payload["cases"]
                ]
            )
        if tag == "enum":
            return Enum_(cases=[c["name"] for c in payload["cases"]])
        if tag == "flags":
            return Flags(flags=[f["name"] for f in payload["flags"]])
        if tag == "tuple":
            return Tuple(types=[self.convert_type(t) for t in payload["types"]])
        if tag == "option":
            return OptionKind(self.convert_type(payload))
        if tag == "result":
            return ResultKind(
                ok=self.convert_optional_type(payload.get("ok")),
                err=self.convert_optional_type(payload.get("err")),
            )
        if tag == "list":
            return ListKind(self.convert_type(payload))
        if tag == "fixed_size_list":
            inner, size = payload
            return FixedList(self.convert_type(inner), size)
        if tag == "type":
            return Alias(self.convert_type(payload))
        if tag == "handle":
            mode, resource = next(iter(payload.items()))
            return Handle(TypeId(resource), HandleMode(mode))
        if tag == "future":
            return Future(self.convert_optional_type(payload))
        if tag == "stream":
            return Stream(self.convert_optional_type(payload))
        raise SchemaLoadError(f"Unknown type kind: {tag}")

    def convert_function(self, data: Dict[str, Any]) -> Function:
        kind, resource = self._function_kind(data.get("kind", "freestanding"))
        params = [self._param(p) for p in data.get("params", [])]
        # The receiver of a method is implicit on the generated trait
        if kind == FunctionKind.METHOD and params and params[0][0] == "self":
            params = params[1:]

        return Function(
            name=self._plain_name(data["name"], kind),
            params=params,
            result=self._result(data),
            kind=kind,
            resource=resource,
            docs=_docs(data),
        )

    def _function_kind(self, kind: Any):
        if isinstance(kind, str):
            return FunctionKind.FREESTANDING, None
        tag, resource = next(iter(kind.items()))
        tag = tag.replace("async-", "")
        return FunctionKind(tag), TypeId(resource)

    def _plain_name(self, name: str, kind: FunctionKind) -> str:
        if kind == FunctionKind.CONSTRUCTOR:
            return "constructor"
        match = RESOURCE_FUNCTION_PATTERN.match(name)
        return match.group("name") if match else name

    def _param(self, data: Any):
        if isinstance(data, dict):
            return data["name"], self.convert_type(data["type"])
        name, ty = data
        return name, self.convert_type(ty)

    def _result(self, data: Dict[str, Any]) -> Optional[SchemaType]:
        if "result" in data:
            return self.convert_optional_type(data["result"])
        # Older resolver releases emit a list of (possibly named) results
        results = data.get("results") or []
        if isinstance(results, list) and results:
            first = results[0]
            return self.convert_type(first["type"] if isinstance(first, dict) else first)
        return None
