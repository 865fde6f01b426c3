"""
Base renderer interface for declared entities.

Defines the contract every per-entity renderer implements.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..core.context import SdkFile
from ..core.templates import TemplateEngine, get_default_template_engine


class DeclarationRenderer(ABC):
    """Abstract base class for entity renderers.

    A renderer writes statements into the SdkFile it is handed and nothing
    else; imports, exports and file placement are handled by the context.
    """

    kind: str = ""

    def __init__(self, template_engine: Optional[TemplateEngine] = None):
        self._template_engine = template_engine

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this renderer."""
        if self._template_engine is None:
            self._template_engine = get_default_template_engine()
        return self._template_engine

    @abstractmethod
    def render_primary(self, entity: Any, sdk_file: SdkFile) -> None:
        """Write the primary declaration of ``entity``."""
        pass

    def render_schema(self, entity: Any, sdk_file: SdkFile) -> None:
        """Write the schema twin of ``entity``. Renderers without one write nothing."""
        pass

    def render(self, entity: Any, sdk_file: SdkFile) -> None:
        """Render a linked pair: ``sdk_file`` is primary, its twin the schema file."""
        self.render_primary(entity, sdk_file)
        if sdk_file.twin is not None:
            self.render_schema(entity, sdk_file.twin)

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a bundled template with context."""
        return self.template_engine.render_template(template_name, context)

    def docs(self, sdk_file: SdkFile, text: Optional[str]) -> Optional[str]:
        """Docs to emit, honouring ``add_docs``."""
        if not text or not sdk_file.config.add_docs:
            return None
        return text
