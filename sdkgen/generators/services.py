"""
Service declaration renderer.

Every node of the service tree becomes a client class. The root client owns
the ``HttpClient``, auth and environment; nested clients receive the shared
``HttpClient`` from their parent. Each endpoint becomes an async method on
its client plus an endpoint module pair holding its ``Request``,
``Response`` and ``Error`` declarations and schemas.
"""

import re
from typing import Any, Dict, List, Optional, Tuple

from ..core.auth import ParsedAuthScheme
from ..core.context import SdkFile
from ..core.converters import SchemaConverter, StringExpressionConverter, TypeHintConverter
from ..core.errors import GeneratorError
from ..core.naming import attribute_name, class_name, module_name
from ..core.paths import View
from ..core.referencers import ImportStrategy
from ..core.services import AugmentedService
from ..ir.model import (
    AuthRequirement,
    ContainerType,
    HttpEndpoint,
    HttpHeader,
    ReferenceType,
    TypeReference,
)
from ..logging_config import get_logger
from .base import DeclarationRenderer

logger = get_logger(__name__)

_PATH_PARAMETER = re.compile(r"\{(\w+)\}")


def _is_optional(reference: TypeReference) -> bool:
    return reference.type == ReferenceType.CONTAINER and reference.container == ContainerType.OPTIONAL


def _has_body(reference: Optional[TypeReference]) -> bool:
    return reference is not None and reference.type != ReferenceType.VOID


class ServiceDeclarationRenderer(DeclarationRenderer):
    """Renders service clients and their endpoint modules."""

    kind = "service"

    def render_primary(self, service: AugmentedService, sdk_file: SdkFile) -> None:
        logger.debug("Rendering service %s", service.name)
        name = self.get_class_name(service, sdk_file)

        methods = []
        for endpoint in service.endpoints:
            sdk_file.with_endpoint(
                endpoint,
                lambda endpoint_file, endpoint=endpoint: self.render_endpoint(endpoint, endpoint_file),
            )
            methods.append(self._render_method(service, endpoint, sdk_file))

        if service.is_root:
            context = self._root_client_context(sdk_file)
        else:
            context = self._nested_client_context(sdk_file)

        code = self.render_template(
            "client.py.j2",
            {
                **context,
                "class_name": name,
                "docs": self.docs(
                    sdk_file, service.original_service.docs if service.original_service else None
                ),
                "children": self._children(service, name, sdk_file),
                "methods": methods,
            },
        )
        sdk_file.add_statement(code, exports=(name,))

    def get_class_name(self, service: AugmentedService, sdk_file: SdkFile) -> str:
        referencers = sdk_file.context.referencers[View.PRIMARY]
        if service.is_root:
            return referencers.root_service.get_exported_name(service.name)
        return referencers.service.get_exported_name(service.name)

    # Client classes

    def _children(self, service: AugmentedService, own_name: str, sdk_file: SdkFile) -> List[Dict[str, str]]:
        children = []
        for wrapped in service.wrapped_services:
            alias = f"{class_name(wrapped.attribute)}Client"
            if alias == own_name:
                alias = f"{alias}_"
            reference = sdk_file.get_reference_to_service(wrapped.name, alias=alias)
            children.append({"attribute": wrapped.attribute, "reference": reference.qualified_name})
        return children

    def _nested_client_context(self, sdk_file: SdkFile) -> Dict[str, Any]:
        http_client = sdk_file.core_utilities.http_client
        return {
            "parameters": [f"http_client: {http_client.client_class()}"],
            "init_lines": ["self._http_client = http_client"],
            "auth_headers": None,
            "typing_module": None,
        }

    def _root_client_context(self, sdk_file: SdkFile) -> Dict[str, Any]:
        typing_module = sdk_file.import_module("typing")
        parameters = []
        init_lines = []

        environments = sdk_file.environments
        if environments is not None:
            enum = environments.enum_reference
            if environments.default_environment is not None:
                parameters.append(f"environment: {enum} = {environments.default_environment}")
            else:
                parameters.append(f"environment: {enum}")
            parameters.append(f"base_url: {typing_module}.Optional[str] = None")
            base_url = "base_url or environment.value"
        else:
            parameters.append("base_url: str")
            base_url = "base_url"

        auth_schemes = sdk_file.auth_schemes
        optional_auth = sdk_file.ir.auth.requirement == AuthRequirement.ANY
        for scheme in auth_schemes:
            for parameter in scheme.parameters:
                if optional_auth:
                    parameters.append(f"{parameter}: {typing_module}.Optional[str] = None")
                else:
                    parameters.append(f"{parameter}: str")
                init_lines.append(f"self._{parameter} = {parameter}")
        parameters.append("timeout: float = 60")

        http_client = sdk_file.core_utilities.http_client
        init_lines.append(
            "self._http_client = "
            + http_client.instantiate(
                base_url=base_url,
                headers="self._get_headers" if auth_schemes else "None",
                timeout="timeout",
            )
        )

        return {
            "parameters": parameters,
            "init_lines": init_lines,
            "auth_headers": self._auth_headers(auth_schemes, optional_auth) if auth_schemes else None,
            "typing_module": typing_module,
        }

    def _auth_headers(self, schemes: List[ParsedAuthScheme], optional: bool) -> List[Dict[str, Any]]:
        return [
            {
                "header": scheme.header,
                "value": scheme.header_value,
                "optional": optional,
                "guard": f"self._{scheme.parameters[0]}",
            }
            for scheme in schemes
        ]

    # Endpoint methods

    def _render_method(self, service: AugmentedService, endpoint: HttpEndpoint, sdk_file: SdkFile) -> str:
        hints = TypeHintConverter(sdk_file)
        strings = StringExpressionConverter(sdk_file)

        positional = [
            f"{attribute_name(parameter.name)}: {hints.convert(parameter.value_type)}"
            for parameter in endpoint.path_parameters
        ]
        json = None
        if _has_body(endpoint.request):
            positional.append(f"request: {hints.convert(endpoint.request)}")
            json = f"{self._endpoint_schema(endpoint, 'Request', sdk_file)}.json(request)"

        keyword = []
        params = []
        for query in endpoint.query_parameters:
            name = attribute_name(query.name)
            keyword.append(self._keyword_parameter(name, query.value_type, hints))
            value = name if query.allow_multiple else self._value_expression(query.value_type, name, strings)
            params.append((query.name, value))

        headers = []
        for header in self._headers(service, endpoint):
            name = attribute_name(header.name)
            keyword.append(self._keyword_parameter(name, header.value_type, hints))
            headers.append((header.header, self._value_expression(header.value_type, name, strings)))

        response = None
        return_type = "None"
        if _has_body(endpoint.response):
            return_type = hints.convert(endpoint.response)
            response = f"{self._endpoint_schema(endpoint, 'Response', sdk_file)}.parse(_response.json())"

        return self.render_template(
            "endpoint_method.py.j2",
            {
                "method_name": attribute_name(endpoint.name),
                "positional": positional,
                "keyword": keyword,
                "return_type": return_type,
                "docs": self.docs(sdk_file, endpoint.docs),
                "http_method": endpoint.method.value,
                "path": self._path_expression(service, endpoint, strings),
                "params": params,
                "json": json,
                "headers": headers,
                "response": response,
                "errors": self._errors(endpoint, sdk_file),
                "api_error": sdk_file.core_utilities.http_client.api_error(),
            },
        )

    def _headers(self, service: AugmentedService, endpoint: HttpEndpoint) -> List[HttpHeader]:
        service_headers = service.original_service.headers if service.original_service else []
        return list(service_headers) + list(endpoint.headers)

    def _keyword_parameter(self, name: str, reference: TypeReference, hints: TypeHintConverter) -> str:
        if _is_optional(reference):
            return f"{name}: {hints.convert(reference)} = None"
        return f"{name}: {hints.convert(reference)}"

    def _value_expression(self, reference: TypeReference, name: str, strings: StringExpressionConverter) -> str:
        if _is_optional(reference):
            inner = strings.convert(reference.item_type, name)
            if inner == name:
                return name
            return f"{inner} if {name} is not None else None"
        return strings.convert(reference, name)

    def _path_expression(
        self, service: AugmentedService, endpoint: HttpEndpoint, strings: StringExpressionConverter
    ) -> str:
        path = "/".join(
            part.strip("/") for part in (service.base_path, endpoint.path) if part.strip("/")
        )
        parameters = {parameter.name: parameter for parameter in endpoint.path_parameters}
        if not parameters:
            return repr(path)

        def replace(match) -> str:
            parameter = parameters.get(match.group(1))
            if parameter is None:
                raise GeneratorError(
                    f"Endpoint {endpoint.name} uses undeclared path parameter '{match.group(1)}'"
                )
            return "{" + strings.convert(parameter.value_type, attribute_name(parameter.name)) + "}"

        return "f" + repr(_PATH_PARAMETER.sub(replace, path))

    def _errors(self, endpoint: HttpEndpoint, sdk_file: SdkFile) -> List[Dict[str, Any]]:
        errors = []
        for error_name in endpoint.errors:
            declaration = sdk_file.error_resolver.get_error_declaration(error_name)
            if declaration.status_code is None:
                logger.warning("Error %s has no status code; not raised by %s", error_name, endpoint.name)
                continue
            body = ""
            if _has_body(declaration.type):
                schema = sdk_file.get_reference_to_error(error_name, view=View.SCHEMA)
                body = f"{schema}.parse(_body)"
            errors.append(
                {
                    "status_code": declaration.status_code,
                    "reference": sdk_file.get_reference_to_error(error_name, view=View.PRIMARY),
                    "body": body,
                }
            )
        return errors

    def _endpoint_schema(self, endpoint: HttpEndpoint, member: str, sdk_file: SdkFile) -> str:
        return sdk_file.get_reference_to_endpoint(
            endpoint,
            view=View.SCHEMA,
            sub_import=(member,),
            alias=f"{module_name(endpoint.name)}_schemas",
        )

    # Endpoint modules

    def render_endpoint(self, endpoint: HttpEndpoint, endpoint_file: SdkFile) -> None:
        """Render the endpoint module pair; ``endpoint_file`` is the primary one."""
        self._render_endpoint_primary(endpoint, endpoint_file)
        if endpoint_file.twin is not None:
            self._render_endpoint_schema(endpoint, endpoint_file.twin)

    def _render_endpoint_primary(self, endpoint: HttpEndpoint, sdk_file: SdkFile) -> None:
        # Module-level aliases are evaluated at import time
        hints = TypeHintConverter(sdk_file, import_strategy=ImportStrategy.direct())
        if _has_body(endpoint.request):
            sdk_file.add_statement(f"Request = {hints.convert(endpoint.request)}", exports=("Request",))
        response = hints.convert(endpoint.response) if _has_body(endpoint.response) else "None"
        sdk_file.add_statement(f"Response = {response}", exports=("Response",))

        errors = [
            sdk_file.get_reference_to_error(
                error_name, view=View.PRIMARY, import_strategy=ImportStrategy.direct()
            )
            for error_name in endpoint.errors
        ]
        if len(errors) == 1:
            sdk_file.add_statement(f"Error = {errors[0]}", exports=("Error",))
        elif errors:
            union = f"{sdk_file.import_module('typing')}.Union[{', '.join(errors)}]"
            sdk_file.add_statement(f"Error = {union}", exports=("Error",))

    def _render_endpoint_schema(self, endpoint: HttpEndpoint, sdk_file: SdkFile) -> None:
        converter = SchemaConverter(sdk_file)
        if _has_body(endpoint.request):
            sdk_file.add_statement(f"Request = {converter.convert(endpoint.request)}", exports=("Request",))
        if _has_body(endpoint.response):
            sdk_file.add_statement(f"Response = {converter.convert(endpoint.response)}", exports=("Response",))

        variants: List[Tuple[str, str]] = []
        for error_name in endpoint.errors:
            declaration = sdk_file.error_resolver.get_error_declaration(error_name)
            if _has_body(declaration.type):
                variants.append(
                    (declaration.discriminant_value, sdk_file.get_reference_to_error(error_name, view=View.SCHEMA))
                )
        if variants:
            schemas = sdk_file.core_utilities.schemas
            error = schemas.union(sdk_file.constants.error_discriminant, dict(variants))
            sdk_file.add_statement(f"Error = {error}", exports=("Error",))
