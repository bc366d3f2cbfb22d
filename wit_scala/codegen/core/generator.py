"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional, Union
from pathlib import Path

from .config import GeneratorConfig, load_config
from .schema import (
    FunctionItem,
    InterfaceItem,
    SchemaGraph,
    UNREPRESENTABLE_KINDS,
    WorldId,
)
from .templates import TemplateEngine, TemplateError, create_template_engine
from ...logging_config import get_logger

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class MalformedSchemaError(GeneratorError):
    """The resolved schema violates an invariant the resolver guarantees."""

    pass


class UnsupportedCapabilityError(GeneratorError):
    """The schema asks for something the target runtime cannot express."""

    def __init__(self, message: str, resource_name: str, interface_name: str):
        super().__init__(message)
        self.resource_name = resource_name
        self.interface_name = interface_name


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None):
        """Initialize generator with optional configuration."""
        if isinstance(config, GeneratorConfig):
            self.config = config
        else:
            self.config = load_config(custom_config=config)
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'scala')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.scala')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, graph: SchemaGraph, world_id: WorldId) -> Dict[str, str]:
        """
        Generate bindings for a world.

        Args:
            graph: Resolved schema graph
            world_id: World whose imports and exports are generated

        Returns:
            Mapping of relative file path to generated source
        """
        pass

    def validate_schema(self, graph: SchemaGraph, world_id: WorldId) -> List[str]:
        """
        Collect warnings about constructs that degrade during generation.

        The schema itself is trusted; this only reports lossy spots.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []
        world = graph.world(world_id)

        interface_ids = []
        for items in (world.imports, world.exports):
            for key, item in items.items():
                if isinstance(item, InterfaceItem):
                    interface_ids.append(item.id)
                elif isinstance(item, FunctionItem):
                    warnings.append(
                        f"World-level function '{key}' in world '{world.name}' "
                        f"is not generated"
                    )

        for interface_id in dict.fromkeys(interface_ids):
            iface = graph.interface(interface_id)
            for name, type_id in iface.types.items():
                typedef = graph.type_def(type_id)
                if isinstance(typedef.kind, UNREPRESENTABLE_KINDS):
                    warnings.append(
                        f"Type {iface.name}.{name} has no Scala representation "
                        f"and is rendered as a placeholder"
                    )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines)

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: Dict[str, str],
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Generated sources keyed by relative path
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.files = files
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(files={})
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_bindings(
    generator: CodeGenerator, graph: SchemaGraph, world_id: WorldId
) -> GenerationResult:
    """
    Generate bindings using the specified generator with error handling.

    Either every file is produced or none is.

    Args:
        generator: Code generator instance
        graph: Resolved schema graph
        world_id: World to generate

    Returns:
        GenerationResult with files, warnings, and metadata
    """
    try:
        warnings = generator.validate_schema(graph, world_id)
        for warning in warnings:
            logger.debug("Schema warning: %s", warning)

        files = {
            path: generator.format_code(code)
            for path, code in generator.generate(graph, world_id).items()
        }

        world = graph.world(world_id)
        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "world": world.name,
            "file_count": len(files),
            "base_package": generator.config.base_package,
        }

        return GenerationResult(files, warnings, metadata)

    except (GeneratorError, TemplateError) as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
