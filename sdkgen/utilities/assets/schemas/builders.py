from __future__ import annotations

import datetime as dt
import typing
import uuid as _uuid

from .schema import Schema, SchemaError, lazy_object


class _Primitive(Schema):
    def __init__(self, name: str, types: typing.Tuple[type, ...]):
        self.name = name
        self.types = types

    def parse(self, raw, path=()):
        if isinstance(raw, bool) and bool not in self.types:
            raise SchemaError(path, f"expected {self.name}, got bool")
        if not isinstance(raw, self.types):
            raise SchemaError(path, f"expected {self.name}, got {type(raw).__name__}")
        return raw

    def json(self, value, path=()):
        return value


class _DateTime(Schema):
    def parse(self, raw, path=()):
        if not isinstance(raw, str):
            raise SchemaError(path, "expected an ISO 8601 string")
        try:
            return dt.datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError as exc:
            raise SchemaError(path, str(exc)) from exc

    def json(self, value, path=()):
        return value.isoformat()


class _Uuid(Schema):
    def parse(self, raw, path=()):
        try:
            return str(_uuid.UUID(str(raw)))
        except ValueError as exc:
            raise SchemaError(path, "expected a UUID") from exc

    def json(self, value, path=()):
        return str(value)


class _Unknown(Schema):
    def parse(self, raw, path=()):
        return raw

    def json(self, value, path=()):
        return value


class _List(Schema):
    def __init__(self, item: Schema, unique: bool = False):
        self.item = item
        self.unique = unique

    def parse(self, raw, path=()):
        if not isinstance(raw, list):
            raise SchemaError(path, "expected a list")
        items = [self.item.parse(value, [*path, str(index)]) for index, value in enumerate(raw)]
        if self.unique:
            unique = []
            for item in items:
                if item not in unique:
                    unique.append(item)
            return unique
        return items

    def json(self, value, path=()):
        return [self.item.json(item, [*path, str(index)]) for index, item in enumerate(value)]


class _Optional(Schema):
    is_optional = True

    def __init__(self, item: Schema):
        self.item = item

    def parse(self, raw, path=()):
        return None if raw is None else self.item.parse(raw, path)

    def json(self, value, path=()):
        return None if value is None else self.item.json(value, path)


class _Dict(Schema):
    def __init__(self, key: Schema, value: Schema):
        self.key = key
        self.value = value

    def parse(self, raw, path=()):
        if not isinstance(raw, dict):
            raise SchemaError(path, "expected an object")
        return {
            self.key.parse(key, path): self.value.parse(value, [*path, str(key)])
            for key, value in raw.items()
        }

    def json(self, value, path=()):
        return {
            self.key.json(key, path): self.value.json(item, [*path, str(key)])
            for key, item in value.items()
        }


class Property(typing.NamedTuple):
    wire_key: str
    schema: Schema


class _Object(Schema):
    def __init__(self, properties: typing.Dict[str, Property]):
        self.properties = dict(properties)

    def extend(self, other: Schema) -> Schema:
        return lazy_object(lambda: _Object({**other.properties, **self.properties}))

    def parse(self, raw, path=()):
        if not isinstance(raw, dict):
            raise SchemaError(path, "expected an object")
        parsed = {}
        for name, prop in self.properties.items():
            if prop.wire_key in raw:
                parsed[name] = prop.schema.parse(raw[prop.wire_key], [*path, prop.wire_key])
            elif not prop.schema.is_optional:
                raise SchemaError([*path, prop.wire_key], "missing required property")
        return parsed

    def json(self, value, path=()):
        serialized = {}
        for name, prop in self.properties.items():
            if name in value and value[name] is not None:
                serialized[prop.wire_key] = prop.schema.json(value[name], [*path, prop.wire_key])
        return serialized


class _Enum(Schema):
    def __init__(self, values: typing.Sequence[str]):
        self.values = list(values)

    def parse(self, raw, path=()):
        if raw not in self.values:
            raise SchemaError(path, f"expected one of {self.values}")
        return raw

    def json(self, value, path=()):
        return getattr(value, "value", value)


class _Union(Schema):
    def __init__(
        self,
        discriminant: str,
        variants: typing.Dict[str, Schema],
        python_key: typing.Optional[str] = None,
    ):
        self.discriminant = discriminant
        self.python_key = python_key or discriminant
        self.variants = dict(variants)

    def _variant(self, key, path):
        if key not in self.variants:
            raise SchemaError([*path, self.discriminant], f"unexpected variant {key!r}")
        return self.variants[key]

    def parse(self, raw, path=()):
        if not isinstance(raw, dict) or self.discriminant not in raw:
            raise SchemaError(path, f"missing discriminant {self.discriminant!r}")
        key = raw[self.discriminant]
        parsed = self._variant(key, path).parse(raw, path)
        if isinstance(parsed, dict):
            parsed[self.python_key] = key
            return parsed
        return {self.python_key: key, "value": parsed}

    def json(self, value, path=()):
        key = value[self.python_key]
        serialized = self._variant(key, path).json(value, path)
        if not isinstance(serialized, dict):
            serialized = {"value": serialized}
        serialized[self.discriminant] = key
        return serialized


def string() -> Schema:
    return _Primitive("string", (str,))


def integer() -> Schema:
    return _Primitive("integer", (int,))


def double() -> Schema:
    return _Primitive("double", (int, float))


def boolean() -> Schema:
    return _Primitive("boolean", (bool,))


def date_time() -> Schema:
    return _DateTime()


def uuid() -> Schema:
    return _Uuid()


def unknown() -> Schema:
    return _Unknown()


def list_(item: Schema) -> Schema:
    return _List(item)


def set_(item: Schema) -> Schema:
    return _List(item, unique=True)


def optional(item: Schema) -> Schema:
    return _Optional(item)


def dict_(key: Schema, value: Schema) -> Schema:
    return _Dict(key, value)


def property(wire_key: str, schema: Schema) -> Property:  # noqa: A001
    return Property(wire_key, schema)


def object_(properties: typing.Dict[str, Property]) -> Schema:
    return _Object(properties)


def enum_(values: typing.Sequence[str]) -> Schema:
    return _Enum(values)


def union(
    discriminant: str,
    variants: typing.Dict[str, Schema],
    python_key: typing.Optional[str] = None,
) -> Schema:
    return _Union(discriminant, variants, python_key)
