"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import (
    CodeGenerator,
    GeneratorError,
    GenerationResult,
    MalformedSchemaError,
    UnsupportedCapabilityError,
    generate_bindings,
)
from .schema import (
    FunctionKind,
    PrimitiveKind,
    RenderContext,
    SchemaGraph,
    TypeId,
    InterfaceId,
    PackageId,
    WorldId,
)
from .loader import SchemaLoadError, convert_resolve, select_world
from .naming import NameSanitizer, NamingCase
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "MalformedSchemaError",
    "UnsupportedCapabilityError",
    "generate_bindings",
    # Schema graph
    "FunctionKind",
    "PrimitiveKind",
    "RenderContext",
    "SchemaGraph",
    "TypeId",
    "InterfaceId",
    "PackageId",
    "WorldId",
    "SchemaLoadError",
    "convert_resolve",
    "select_world",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    # Configuration
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Templates
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
