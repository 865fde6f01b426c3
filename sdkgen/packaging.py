"""
Packaging of a generated SDK.

The PackageWriter is the only part of sdkgen that touches the filesystem: it
writes the in-memory file tree under ``<output>/<package_name>/``, copies the
used core utilities next to it and renders ``pyproject.toml`` and
``README.md`` for the generated distribution.
"""

from pathlib import Path
from typing import Dict, List, Optional

from .core.dependencies import Dependency
from .core.templates import TemplateEngine, get_default_template_engine
from .logging_config import get_logger

logger = get_logger(__name__)


class PackageWriter:
    """Materializes a GeneratedPackage on disk."""

    def __init__(self, template_engine: Optional[TemplateEngine] = None):
        self._template_engine = template_engine

    @property
    def template_engine(self) -> TemplateEngine:
        if self._template_engine is None:
            self._template_engine = get_default_template_engine()
        return self._template_engine

    def write(self, package, output_dir: Path, core_utilities_manager) -> Path:
        """
        Write ``package`` below ``output_dir``.

        Args:
            package: GeneratedPackage produced by SdkGenerator
            output_dir: Project directory receiving the package
            core_utilities_manager: Finalized manager whose utilities are copied

        Returns:
            Path of the written Python package
        """
        output_dir = Path(output_dir)
        package_dir = output_dir / package.package_name
        package_dir.mkdir(parents=True, exist_ok=True)

        for relative_path, content in package.files.items():
            target = package_dir / relative_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        logger.info("Wrote %d files to %s", len(package.files), package_dir)

        copied = core_utilities_manager.copy_utilities_into(package_dir)
        logger.info("Copied %d core utility files", len(copied))

        # Every directory must be importable even when nothing was exported from it
        for directory in sorted({path.parent for path in package_dir.rglob("*.py")}):
            init = directory / "__init__.py"
            if not init.exists():
                init.write_text("", encoding="utf-8")

        (output_dir / "pyproject.toml").write_text(self.render_pyproject(package), encoding="utf-8")
        (output_dir / "README.md").write_text(self.render_readme(package), encoding="utf-8")
        return package_dir

    def get_distribution_name(self, package) -> str:
        return package.package_name.replace("_", "-")

    def get_description(self, package) -> str:
        return package.description or f"Python client for the {package.api_name} API"

    def split_requirements(self, dependencies: Dict[str, Dependency]) -> Dict[str, List[str]]:
        """Plain requirements and peer (optional) requirements, each sorted."""
        requirements = []
        peer_requirements = []
        for dependency in dependencies.values():
            if dependency.prefer_peer:
                peer_requirements.append(dependency.to_requirement())
            else:
                requirements.append(dependency.to_requirement())
        return {"requirements": sorted(requirements), "peer_requirements": sorted(peer_requirements)}

    def render_pyproject(self, package) -> str:
        return self.template_engine.render_template(
            "pyproject.toml.j2",
            {
                "distribution_name": self.get_distribution_name(package),
                "package_name": package.package_name,
                "package_version": package.package_version,
                "description": self.get_description(package),
                "python_version": package.python_version,
                "repository_url": package.repository_url,
                **self.split_requirements(package.dependencies),
            },
        ) + "\n"

    def render_readme(self, package) -> str:
        return self.template_engine.render_template(
            "README.md.j2",
            {
                "api_name": package.api_name,
                "description": self.get_description(package),
                "distribution_name": self.get_distribution_name(package),
                "package_name": package.package_name,
                "client_name": package.root_client_name,
                "client_arguments": 'base_url="https://api.example.com"',
                "utilities": package.used_utilities,
            },
        ) + "\n"
