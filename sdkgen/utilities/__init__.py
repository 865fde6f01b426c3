"""
Core utilities that generated packages may depend on.
"""

from .catalog import CORE_UTILITY_CATALOG, CoreUtilityDescriptor, UtilityFile, build_catalog
from .handles import (
    AuthUtility,
    CoreUtility,
    HttpClientUtility,
    SchemasUtility,
)
from .manager import CoreUtilities, CoreUtilitiesManager

__all__ = [
    "CORE_UTILITY_CATALOG",
    "AuthUtility",
    "CoreUtilities",
    "CoreUtilitiesManager",
    "CoreUtility",
    "CoreUtilityDescriptor",
    "HttpClientUtility",
    "SchemasUtility",
    "UtilityFile",
    "build_catalog",
]
