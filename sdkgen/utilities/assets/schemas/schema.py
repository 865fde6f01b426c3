from __future__ import annotations

import typing


class SchemaError(ValueError):
    """Raised when a wire value does not match its schema."""

    def __init__(self, path: typing.Sequence[str], message: str):
        self.path = list(path)
        location = ".".join(self.path) or "<root>"
        super().__init__(f"{location}: {message}")


class Schema:
    """Parses wire JSON into Python values and serializes them back."""

    # Object properties with an optional schema may be absent on the wire
    is_optional = False

    def parse(self, raw: typing.Any, path: typing.Sequence[str] = ()) -> typing.Any:
        raise NotImplementedError

    def json(self, value: typing.Any, path: typing.Sequence[str] = ()) -> typing.Any:
        raise NotImplementedError


class _LazySchema(Schema):
    def __init__(self, getter: typing.Callable[[], Schema]):
        self._getter = getter
        self._schema: typing.Optional[Schema] = None

    def _resolve(self) -> Schema:
        if self._schema is None:
            self._schema = self._getter()
        return self._schema

    @property
    def is_optional(self) -> bool:
        return self._resolve().is_optional

    def parse(self, raw, path=()):
        return self._resolve().parse(raw, path)

    def json(self, value, path=()):
        return self._resolve().json(value, path)


class _LazyObjectSchema(_LazySchema):
    """Lazy schema that still supports object operations such as ``extend``."""

    @property
    def properties(self):
        return self._resolve().properties

    def extend(self, other: Schema) -> Schema:
        return lazy_object(lambda: self._resolve().extend(other))


def lazy(getter: typing.Callable[[], Schema]) -> Schema:
    """Defer building a schema until first use, breaking reference cycles."""
    return _LazySchema(getter)


def lazy_object(getter: typing.Callable[[], Schema]) -> Schema:
    """Like ``lazy`` for object schemas, keeping ``properties`` and ``extend``."""
    return _LazyObjectSchema(getter)
