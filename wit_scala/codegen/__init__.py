"""
WIT Code Generation Module

Generates Scala.js component model bindings from resolved WIT schemas.
"""

from typing import Any, Dict, Optional

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    list_supported_languages,
)
from .core.generator import CodeGenerator, GenerationResult, generate_bindings
from .core.schema import RenderContext, SchemaGraph
from .core.loader import SchemaLoadError, convert_resolve, select_world
from .core.config import GeneratorConfig, ConfigManager, load_config


def generate_from_resolve(
    resolve_data: Dict[str, Any],
    world: Optional[str] = None,
    language: str = "scala",
    config: Optional[Dict[str, Any]] = None,
) -> GenerationResult:
    """
    Generate bindings from resolver output.

    Args:
        resolve_data: Parsed ``wasm-tools component wit --json`` document
        world: World to generate (may be omitted when there is only one)
        language: Target language name
        config: Generator configuration dict or path

    Returns:
        GenerationResult with generated files

    Raises:
        SchemaLoadError: If the document cannot be converted or the world
            cannot be found
    """
    graph = convert_resolve(resolve_data)
    world_id = select_world(graph, world)
    generator = get_generator(language, config)
    return generate_bindings(generator, graph, world_id)


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "RenderContext",
    "SchemaGraph",
    "SchemaLoadError",
    "GeneratorConfig",
    "ConfigManager",
    "convert_resolve",
    "generate_bindings",
    "generate_from_resolve",
    "get_generator",
    "list_supported_languages",
    "load_config",
    "select_world",
]
