"""
Error declaration renderer.

Primary view: an exception class deriving from the ``http-client`` utility's
``ApiError`` with a fixed status code. Schema view: the schema of the error
body; errors without a declared body accept any body.
"""

from ..core.context import SdkFile
from ..core.converters import SchemaConverter, TypeHintConverter
from ..core.naming import class_name
from ..ir.model import ErrorDeclaration
from ..logging_config import get_logger
from .base import DeclarationRenderer

logger = get_logger(__name__)


class ErrorDeclarationRenderer(DeclarationRenderer):
    """Renders declared errors in both views."""

    kind = "error"

    def render_primary(self, declaration: ErrorDeclaration, sdk_file: SdkFile) -> None:
        logger.debug("Rendering error %s", declaration.name)
        name = class_name(declaration.name.name)
        body_type = None
        if declaration.type is not None:
            body_type = TypeHintConverter(sdk_file).convert(declaration.type)

        code = self.render_template(
            "error.py.j2",
            {
                "class_name": name,
                # Base classes are evaluated at import time
                "base": sdk_file.core_utilities.http_client.api_error(),
                "docs": self.docs(sdk_file, declaration.docs),
                "body_type": body_type,
                "status_code": declaration.status_code,
            },
        )
        sdk_file.add_statement(code, exports=(name,))

    def render_schema(self, declaration: ErrorDeclaration, sdk_file: SdkFile) -> None:
        name = class_name(declaration.name.name)
        if declaration.type is None:
            schema = sdk_file.core_utilities.schemas.unknown()
        else:
            schema = SchemaConverter(sdk_file).convert(declaration.type)
        sdk_file.add_statement(f"{name} = {schema}", exports=(name,))
