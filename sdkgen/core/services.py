"""
Service tree of the generated client.

The IR lists services flat, each under a namespace path. The generated
client nests them: every prefix of a namespace path becomes a client with
one attribute per child namespace, and the empty path is the root client.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..ir.model import DeclaredName, HttpEndpoint, HttpService, IntermediateRepresentation
from .errors import GeneratorError
from .naming import attribute_name


@dataclass
class WrappedService:
    """A child client exposed as an attribute of its parent."""

    name: DeclaredName
    attribute: str


@dataclass
class AugmentedService:
    """A node of the service tree.

    ``original_service`` is None for namespaces that only group children.
    """

    name: DeclaredName
    original_service: Optional[HttpService] = None
    wrapped_services: List[WrappedService] = field(default_factory=list)

    @property
    def endpoints(self) -> List[HttpEndpoint]:
        if self.original_service is None:
            return []
        return self.original_service.endpoints

    @property
    def base_path(self) -> str:
        if self.original_service is None:
            return ""
        return self.original_service.base_path

    @property
    def is_root(self) -> bool:
        return not self.name.fern_filepath


def construct_augmented_services(ir: IntermediateRepresentation) -> List[AugmentedService]:
    """
    Build the service tree in IR declaration order, parents before children.

    Returns an empty list when the IR declares no services.

    Raises:
        GeneratorError: If two services share one namespace path
    """
    nodes: Dict[Tuple[str, ...], AugmentedService] = {}

    def get_node(path: Tuple[str, ...]) -> AugmentedService:
        if path in nodes:
            return nodes[path]
        if path:
            parent = get_node(path[:-1])
        node = AugmentedService(DeclaredName(path, path[-1] if path else ir.api_name))
        nodes[path] = node
        if path:
            parent.wrapped_services.append(WrappedService(node.name, attribute_name(path[-1])))
        return node

    for service in ir.services:
        node = get_node(service.name.fern_filepath)
        if node.original_service is not None:
            raise GeneratorError(
                f"Services {node.original_service.name} and {service.name} "
                f"share the namespace '{'.'.join(service.name.fern_filepath)}'"
            )
        node.original_service = service

    return list(nodes.values())
