"""
Environments generator.

Writes ``environments.py`` at the package root: one ``str`` enum member per
environment URL. Clients reference it through ``to_parsed_environments``.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.context import SdkFile
from ..core.naming import class_name, constant_name
from ..core.paths import ExportedFile, ExportedFilePath
from ..ir.model import Environments
from ..logging_config import get_logger
from .base import DeclarationRenderer

logger = get_logger(__name__)


@dataclass(frozen=True)
class ParsedEnvironments:
    """Expressions a client uses to default its base URL."""

    enum_reference: str
    default_environment: Optional[str]


class EnvironmentsGenerator(DeclarationRenderer):
    """Renders the environments enum of the API."""

    kind = "environments"
    FILENAME = "environments"

    def get_filepath(self) -> ExportedFilePath:
        return ExportedFilePath(directories=(), file=ExportedFile(self.FILENAME))

    def get_class_name(self, api_name: str) -> str:
        return f"{class_name(api_name)}Environment"

    def render_primary(self, environments: Environments, sdk_file: SdkFile) -> None:
        if not environments.environments:
            logger.debug("No environments declared")
            return

        name = self.get_class_name(sdk_file.api_name)
        code = self.render_template(
            "environments.py.j2",
            {
                "class_name": name,
                "enum_module": sdk_file.import_module("enum"),
                "environments": [
                    {
                        "name": constant_name(environment.name),
                        "url": environment.url,
                        "docs": self.docs(sdk_file, environment.docs),
                    }
                    for environment in environments.environments
                ],
            },
        )
        sdk_file.add_statement(code, exports=(name,))

    def to_parsed_environments(self, sdk_file: SdkFile) -> Optional[ParsedEnvironments]:
        """
        Reference the environments enum from ``sdk_file``.

        Returns None when the API declares no environments.
        """
        environments = sdk_file.ir.environments
        if not environments.environments:
            return None

        name = self.get_class_name(sdk_file.api_name)
        sdk_file.imports_manager.add_import(self.get_filepath(), named=name)

        default = None
        for environment in environments.environments:
            if environment.id == environments.default_environment:
                default = f"{name}.{constant_name(environment.name)}"
        return ParsedEnvironments(enum_reference=name, default_environment=default)
