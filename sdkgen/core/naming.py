"""
Identifier naming for the generated package.

IR names arrive in any style (``createMovie``, ``not-found``, ``HTTPStatus``);
every module, class, attribute and constant of the generated code goes
through one of the helpers at the bottom of this module. Naming is a pure
function of the input, so an entity keeps its location across runs.
"""

import re
from enum import Enum
from functools import lru_cache
from typing import FrozenSet


class NamingCase(Enum):
    """Case styles used by generated identifiers."""
    SNAKE_CASE = "snake"                 # not_found_error
    PASCAL_CASE = "pascal"               # NotFoundError
    SCREAMING_SNAKE = "screaming_snake"  # NOT_FOUND_ERROR


PYTHON_RESERVED_WORDS = frozenset({
    'and', 'as', 'assert', 'async', 'await', 'break', 'class', 'continue',
    'def', 'del', 'elif', 'else', 'except', 'finally', 'for', 'from',
    'global', 'if', 'import', 'in', 'is', 'lambda', 'nonlocal', 'not', 'or',
    'pass', 'raise', 'return', 'try', 'while', 'with', 'yield', 'True',
    'False', 'None',
})

# Builtins that generated attributes and parameters commonly collide with
PYTHON_SHADOWED_BUILTINS = frozenset({
    'bool', 'bytes', 'dict', 'float', 'int', 'list', 'object', 'set', 'str',
    'tuple', 'type', 'id', 'format', 'input', 'filter', 'map', 'hash',
})

_INVALID_CHARACTERS = re.compile(r'[^a-zA-Z0-9_-]')


class NameSanitizer:
    """
    Turns arbitrary IR names into Python identifiers.

    Names that would collide with a reserved word or a shadowed builtin get a
    trailing underscore; names starting with a digit get a leading one.
    """

    def __init__(self, reserved: FrozenSet[str] = PYTHON_RESERVED_WORDS,
                 shadowed: FrozenSet[str] = PYTHON_SHADOWED_BUILTINS):
        self.forbidden = frozenset(reserved) | frozenset(shadowed)
        self.sanitize_name = lru_cache(maxsize=None)(self._sanitize)

    def _sanitize(self, name: str, target_case: NamingCase = NamingCase.SNAKE_CASE) -> str:
        words = _INVALID_CHARACTERS.sub('_', name).strip('_-') or "value"

        if target_case == NamingCase.PASCAL_CASE:
            identifier = to_pascal_case(words)
        elif target_case == NamingCase.SCREAMING_SNAKE:
            identifier = to_snake_case(words).upper()
        else:
            identifier = to_snake_case(words)

        if identifier[:1].isdigit():
            identifier = f"_{identifier}"
        if identifier in self.forbidden:
            identifier = f"{identifier}_"
        return identifier


def to_snake_case(name: str) -> str:
    """Convert to snake_case."""
    name = re.sub(r'[-\s]+', '_', name)
    name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
    name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)
    return re.sub(r'_+', '_', name.lower()).strip('_')


def to_camel_case(name: str) -> str:
    """Convert to camelCase."""
    first, *rest = to_snake_case(name).split('_')
    return first + ''.join(word.capitalize() for word in rest)


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase."""
    return ''.join(word.capitalize() for word in to_snake_case(name).split('_') if word)


_sanitizer = NameSanitizer()


def module_name(name: str) -> str:
    """Name of a generated module or package directory (snake_case)."""
    return _sanitizer.sanitize_name(name, NamingCase.SNAKE_CASE)


def class_name(name: str) -> str:
    """Name of a generated class (PascalCase)."""
    return _sanitizer.sanitize_name(name, NamingCase.PASCAL_CASE)


def attribute_name(name: str) -> str:
    """Name of a generated attribute, parameter or method (snake_case)."""
    return _sanitizer.sanitize_name(name, NamingCase.SNAKE_CASE)


def constant_name(name: str) -> str:
    """Name of a generated enum member or constant (SCREAMING_SNAKE)."""
    return _sanitizer.sanitize_name(name, NamingCase.SCREAMING_SNAKE)
