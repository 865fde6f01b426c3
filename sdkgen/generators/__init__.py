"""
Default renderers of every entity kind.
"""

from .base import DeclarationRenderer
from .registry import RendererRegistry, RegistryError, get_registry, get_renderers, register_renderer

__all__ = [
    "DeclarationRenderer",
    "RegistryError",
    "RendererRegistry",
    "get_registry",
    "get_renderers",
    "register_renderer",
]
