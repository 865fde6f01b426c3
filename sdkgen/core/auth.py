"""
Auth schemes as seen by generated clients.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..ir.model import ApiAuth, AuthScheme, AuthSchemeType
from .naming import attribute_name


@dataclass(frozen=True)
class ParsedAuthScheme:
    """An auth scheme ready for rendering.

    ``parameters`` are constructor arguments of the root client; the header
    value expression reads them back from ``self._<parameter>``.
    """

    type: AuthSchemeType
    header: str
    parameters: Tuple[str, ...]
    header_value: str
    docs: Optional[str] = None


def parse_auth_schemes(auth: ApiAuth, core_utilities) -> List[ParsedAuthScheme]:
    """
    Parse the API's auth schemes, using the ``auth`` core utility for
    bearer and basic header values.

    The utility is only marked used when a bearer or basic scheme exists.
    """
    parsed = []
    for scheme in auth.schemes:
        parsed.append(_parse_scheme(scheme, core_utilities))
    return parsed


def _parse_scheme(scheme: AuthScheme, core_utilities) -> ParsedAuthScheme:
    if scheme.type == AuthSchemeType.BEARER:
        parameter = attribute_name(scheme.name or "token")
        return ParsedAuthScheme(
            type=scheme.type,
            header="Authorization",
            parameters=(parameter,),
            header_value=core_utilities.auth.bearer_header(f"self._{parameter}"),
            docs=scheme.docs,
        )

    if scheme.type == AuthSchemeType.BASIC:
        return ParsedAuthScheme(
            type=scheme.type,
            header="Authorization",
            parameters=("username", "password"),
            header_value=core_utilities.auth.basic_header("self._username", "self._password"),
            docs=scheme.docs,
        )

    if not scheme.header:
        raise ValueError("Header auth schemes need a header name")
    parameter = attribute_name(scheme.name or scheme.header)
    return ParsedAuthScheme(
        type=scheme.type,
        header=scheme.header,
        parameters=(parameter,),
        header_value=f"str(self._{parameter})",
        docs=scheme.docs,
    )
