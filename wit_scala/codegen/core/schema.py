"""
Core schema representation for code generation.

A read-only, arena-style view of a resolved WIT document: packages,
interfaces, worlds and type definitions live in dense tables and refer to
each other through small integer handles.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple as TupleT, Union
from enum import Enum


# Handles


@dataclass(frozen=True)
class TypeId:
    index: int


@dataclass(frozen=True)
class InterfaceId:
    index: int


@dataclass(frozen=True)
class PackageId:
    index: int


@dataclass(frozen=True)
class WorldId:
    index: int


# Types


class PrimitiveKind(Enum):
    """Primitive WIT types."""

    BOOL = "bool"
    S8 = "s8"
    U8 = "u8"
    S16 = "s16"
    U16 = "u16"
    S32 = "s32"
    U32 = "u32"
    S64 = "s64"
    U64 = "u64"
    F32 = "f32"
    F64 = "f64"
    CHAR = "char"
    STRING = "string"


# A schema type is either a primitive or a reference into the type table
SchemaType = Union[PrimitiveKind, TypeId]


@dataclass
class RecordField:
    name: str
    type: SchemaType
    docs: Optional[str] = None


@dataclass
class Case:
    """A variant case; ``type`` is None for payload-less cases."""

    name: str
    type: Optional[SchemaType] = None
    docs: Optional[str] = None


@dataclass
class Record:
    fields: List[RecordField] = field(default_factory=list)


@dataclass
class Variant:
    cases: List[Case] = field(default_factory=list)


@dataclass
class Enum_:
    cases: List[str] = field(default_factory=list)


@dataclass
class Flags:
    flags: List[str] = field(default_factory=list)


@dataclass
class Tuple:
    types: List[SchemaType] = field(default_factory=list)


@dataclass
class OptionKind:
    inner: SchemaType


@dataclass
class ResultKind:
    ok: Optional[SchemaType] = None
    err: Optional[SchemaType] = None


@dataclass
class ListKind:
    inner: SchemaType


@dataclass
class FixedList:
    inner: SchemaType
    size: int


@dataclass
class Alias:
    inner: SchemaType


@dataclass
class Resource:
    pass


class HandleMode(Enum):
    OWN = "own"
    BORROW = "borrow"


@dataclass
class Handle:
    resource: TypeId
    mode: HandleMode = HandleMode.OWN


@dataclass
class Future:
    inner: Optional[SchemaType] = None


@dataclass
class Stream:
    inner: Optional[SchemaType] = None


@dataclass
class Unknown:
    pass


TypeDefKind = Union[
    Record,
    Variant,
    Enum_,
    Flags,
    Tuple,
    OptionKind,
    ResultKind,
    ListKind,
    FixedList,
    Alias,
    Resource,
    Handle,
    Future,
    Stream,
    Unknown,
]

# Kinds that are referenced by name and therefore must carry one
NAMED_KINDS = (Record, Variant, Enum_, Flags, Resource)

# Kinds with no Scala representation
UNREPRESENTABLE_KINDS = (Future, Stream, Unknown)


@dataclass
class TypeDef:
    """A named or anonymous type definition."""

    kind: TypeDefKind
    name: Optional[str] = None
    owner: Optional[InterfaceId] = None
    docs: Optional[str] = None


# Functions


class FunctionKind(Enum):
    FREESTANDING = "freestanding"
    METHOD = "method"
    CONSTRUCTOR = "constructor"
    STATIC = "static"


@dataclass
class Function:
    """A WIT function, possibly attached to a resource."""

    name: str
    params: List[TupleT[str, SchemaType]] = field(default_factory=list)
    result: Optional[SchemaType] = None
    kind: FunctionKind = FunctionKind.FREESTANDING
    resource: Optional[TypeId] = None
    docs: Optional[str] = None

    def belongs_to(self, resource_id: TypeId) -> bool:
        """Check whether this is a method, constructor or static of a resource."""
        return self.kind != FunctionKind.FREESTANDING and self.resource == resource_id


# Packages, interfaces and worlds


@dataclass
class Package:
    namespace: str
    name: str
    version: Optional[str] = None
    docs: Optional[str] = None

    def id_string(self) -> str:
        """Return the ``namespace:name[@version]`` form of the package name."""
        base = f"{self.namespace}:{self.name}"
        return f"{base}@{self.version}" if self.version else base


@dataclass
class Interface:
    name: Optional[str] = None
    package: Optional[PackageId] = None
    types: Dict[str, TypeId] = field(default_factory=dict)
    functions: Dict[str, Function] = field(default_factory=dict)
    docs: Optional[str] = None


@dataclass
class InterfaceItem:
    id: InterfaceId


@dataclass
class FunctionItem:
    function: Function


@dataclass
class TypeItem:
    id: TypeId


WorldItem = Union[InterfaceItem, FunctionItem, TypeItem]


@dataclass
class World:
    name: str
    package: Optional[PackageId] = None
    imports: Dict[str, WorldItem] = field(default_factory=dict)
    exports: Dict[str, WorldItem] = field(default_factory=dict)
    docs: Optional[str] = None


# Graph


class SchemaGraph:
    """Dense tables of packages, interfaces, types and worlds."""

    def __init__(self):
        self.packages: List[Package] = []
        self.interfaces: List[Interface] = []
        self.types: List[TypeDef] = []
        self.worlds: List[World] = []

    # Lookups

    def type_def(self, type_id: TypeId) -> TypeDef:
        return self.types[type_id.index]

    def interface(self, interface_id: InterfaceId) -> Interface:
        return self.interfaces[interface_id.index]

    def package(self, package_id: PackageId) -> Package:
        return self.packages[package_id.index]

    def world(self, world_id: WorldId) -> World:
        return self.worlds[world_id.index]

    def find_world(self, name: str) -> Optional[WorldId]:
        """Find a world by name; the last match wins, as in later packages."""
        found = None
        for index, world in enumerate(self.worlds):
            if world.name == name:
                found = WorldId(index)
        return found

    def interface_namespace(
        self, interface_id: InterfaceId, fallback: Optional[str] = None
    ) -> str:
        """
        Build the namespace string the runtime binds an interface under.

        Returns ``namespace:package/interface[@version]`` for interfaces that
        belong to a package, otherwise ``fallback`` (the world key).
        """
        iface = self.interface(interface_id)
        if iface.package is None or iface.name is None:
            return fallback if fallback is not None else (iface.name or "")

        package = self.package(iface.package)
        namespace = f"{package.namespace}:{package.name}/{iface.name}"
        if package.version:
            namespace = f"{namespace}@{package.version}"
        return namespace

    # Builders

    def add_package(
        self, namespace: str, name: str, version: Optional[str] = None
    ) -> PackageId:
        self.packages.append(Package(namespace=namespace, name=name, version=version))
        return PackageId(len(self.packages) - 1)

    def add_interface(
        self,
        name: Optional[str],
        package: Optional[PackageId] = None,
        docs: Optional[str] = None,
    ) -> InterfaceId:
        self.interfaces.append(Interface(name=name, package=package, docs=docs))
        return InterfaceId(len(self.interfaces) - 1)

    def add_type(
        self,
        kind: TypeDefKind,
        name: Optional[str] = None,
        owner: Optional[InterfaceId] = None,
        docs: Optional[str] = None,
    ) -> TypeId:
        """
        Append a type definition.

        Named types owned by an interface are also registered in that
        interface's type table.
        """
        self.types.append(TypeDef(kind=kind, name=name, owner=owner, docs=docs))
        type_id = TypeId(len(self.types) - 1)
        if owner is not None and name is not None:
            self.interface(owner).types[name] = type_id
        return type_id

    def add_function(self, interface_id: InterfaceId, function: Function) -> Function:
        """Register a function in an interface, keyed the way the resolver keys it."""
        key = function.name
        if function.kind != FunctionKind.FREESTANDING and function.resource is not None:
            resource_name = self.type_def(function.resource).name
            if function.kind == FunctionKind.CONSTRUCTOR:
                key = f"[constructor]{resource_name}"
            else:
                key = f"[{function.kind.value}]{resource_name}.{function.name}"
        self.interface(interface_id).functions[key] = function
        return function

    def add_world(self, name: str, package: Optional[PackageId] = None) -> WorldId:
        self.worlds.append(World(name=name, package=package))
        return WorldId(len(self.worlds) - 1)


@dataclass(frozen=True)
class RenderContext:
    """
    Per-call rendering state.

    ``current_interface`` decides whether a reference to a named type must be
    qualified with its owning interface's package path.
    """

    current_interface: Optional[InterfaceId] = None

    @classmethod
    def for_interface(cls, interface_id: Optional[InterfaceId]) -> "RenderContext":
        return cls(current_interface=interface_id)
