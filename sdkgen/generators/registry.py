"""
Renderer registry for managing the renderers of each entity kind.

Provides registration and instantiation of renderers so the default ones can
be replaced without touching the orchestrator.
"""

from typing import Dict, List, Optional, Type

from ..core.templates import TemplateEngine
from .base import DeclarationRenderer


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


ENTITY_KINDS = ("type", "error", "service", "environments")


class RendererRegistry:
    """Registry for managing available renderers."""

    def __init__(self):
        """Initialize empty registry."""
        self._renderers: Dict[str, Type[DeclarationRenderer]] = {}

    def register(
        self,
        kind: str,
        renderer_class: Type[DeclarationRenderer],
        replace: bool = False,
    ):
        """
        Register a renderer for an entity kind.

        Args:
            kind: Entity kind (``type``, ``error``, ``service`` or ``environments``)
            renderer_class: Class implementing DeclarationRenderer
            replace: If True, replace an existing registration. If False, skip if exists.

        Raises:
            RegistryError: If the renderer class or the kind is invalid
        """
        if not isinstance(renderer_class, type) or not issubclass(renderer_class, DeclarationRenderer):
            raise RegistryError("Renderer class must inherit from DeclarationRenderer")

        kind_key = kind.lower()
        if kind_key not in ENTITY_KINDS:
            raise RegistryError(f"Unknown entity kind: {kind}. Expected one of {', '.join(ENTITY_KINDS)}")

        # Already registered, skip silently
        if kind_key in self._renderers and not replace:
            return

        self._renderers[kind_key] = renderer_class

    def get_renderer_class(self, kind: str) -> Type[DeclarationRenderer]:
        """
        Get renderer class for an entity kind.

        Raises:
            RegistryError: If no renderer is registered
        """
        kind_key = kind.lower()
        if kind_key in self._renderers:
            return self._renderers[kind_key]
        raise RegistryError(
            f"No renderer registered for kind: {kind}. "
            f"Available: {', '.join(self.list_kinds())}"
        )

    def create_renderer(
        self, kind: str, template_engine: Optional[TemplateEngine] = None
    ) -> DeclarationRenderer:
        """Create a renderer instance for ``kind``."""
        return self.get_renderer_class(kind)(template_engine)

    def create_renderers(
        self, template_engine: Optional[TemplateEngine] = None
    ) -> Dict[str, DeclarationRenderer]:
        """Create one renderer per registered kind."""
        return {kind: self.create_renderer(kind, template_engine) for kind in self.list_kinds()}

    def list_kinds(self) -> List[str]:
        """Get list of registered entity kinds."""
        return sorted(self._renderers.keys())


# Global registry instance - created once
_global_registry: Optional[RendererRegistry] = None


def get_registry() -> RendererRegistry:
    """Get the global renderer registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = RendererRegistry()
        _auto_register_renderers(_global_registry)
    return _global_registry


def _auto_register_renderers(registry: RendererRegistry):
    """Register the default renderer of every entity kind."""
    from .environments import EnvironmentsGenerator
    from .errors import ErrorDeclarationRenderer
    from .services import ServiceDeclarationRenderer
    from .types import TypeDeclarationRenderer

    registry.register("type", TypeDeclarationRenderer)
    registry.register("error", ErrorDeclarationRenderer)
    registry.register("service", ServiceDeclarationRenderer)
    registry.register("environments", EnvironmentsGenerator)


def register_renderer(kind: str, renderer_class: Type[DeclarationRenderer]):
    """Register a renderer in the global registry, replacing the current one."""
    get_registry().register(kind, renderer_class, replace=True)


def get_renderers(template_engine: Optional[TemplateEngine] = None) -> Dict[str, DeclarationRenderer]:
    """Instantiate every renderer of the global registry."""
    return get_registry().create_renderers(template_engine)
