"""
Annotations binding generated Scala declarations to the component model.

The Scala.js component runtime reads these at link time to find the WIT
item each declaration stands for.
"""

ANNOTATION_PACKAGE = "scala.scalajs.wit.annotation"

# Body of every host-provided function
NATIVE_MARKER = "scala.scalajs.wit.native"


def _bare(name: str) -> str:
    return f"@{ANNOTATION_PACKAGE}.{name}"


def _named(name: str, *args: str) -> str:
    quoted = ", ".join(f'"{arg}"' for arg in args)
    return f"@{ANNOTATION_PACKAGE}.{name}({quoted})"


def wit_import(namespace: str, name: str) -> str:
    """
    Annotation for an imported function.

    Example:
        @scala.scalajs.wit.annotation.WitImport("wasi:io/streams@0.2.0", "read")
    """
    return _named("WitImport", namespace, name)


def wit_export(namespace: str, name: str) -> str:
    """
    Annotation for an exported function.

    Example:
        @scala.scalajs.wit.annotation.WitExport("wasi:cli/run@0.2.0", "run")
    """
    return _named("WitExport", namespace, name)


def wit_record() -> str:
    return _bare("WitRecord")


def wit_variant() -> str:
    """Shared by variants and enums."""
    return _bare("WitVariant")


def wit_flags(flag_count: int) -> str:
    return f"@{ANNOTATION_PACKAGE}.WitFlags({flag_count})"


def wit_resource_import(namespace: str, name: str) -> str:
    return _named("WitResourceImport", namespace, name)


def wit_resource_constructor() -> str:
    return _bare("WitResourceConstructor")


def wit_resource_method(name: str) -> str:
    return _named("WitResourceMethod", name)


def wit_resource_static_method(name: str) -> str:
    return _named("WitResourceStaticMethod", name)


def wit_resource_drop() -> str:
    return _bare("WitResourceDrop")


def wit_export_interface() -> str:
    return _bare("WitExportInterface")
