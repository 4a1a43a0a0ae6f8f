from typing import Any, Dict, Protocol, Union
import json
import tomllib

import tomli_w
import yaml


class Serializer(Protocol):
    """Serialize/deserialize Python values stored as field contents.

    Implementations should be symmetric: `dump` -> bytes, `load` <- bytes.
    Both raise on values or payloads they cannot handle; `StorageHolder`
    reports those as `ParseFailure`.
    """

    def dump(self, value: Any) -> bytes: ...

    def load(self, data: bytes) -> Any: ...


class JSONSerializer:
    """Serializer using JSON (text). Caller must ensure values are JSON-serializable."""

    def dump(self, value: Any) -> bytes:
        return json.dumps(value, default=lambda o: o.__dict__).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return json.loads(data.decode("utf-8"))


class YAMLSerializer:
    """Serializer using YAML (text). Caller must ensure values are YAML-serializable."""

    def dump(self, value: Any) -> bytes:
        return yaml.safe_dump(value, sort_keys=False).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return yaml.safe_load(data.decode("utf-8"))


class TOMLSerializer:
    """Serializer using TOML (text).

    TOML documents are tables, so only mappings can be stored.
    """

    def dump(self, value: Any) -> bytes:
        return tomli_w.dumps(value).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return tomllib.loads(data.decode("utf-8"))


SERIALIZERS: Dict[str, Serializer] = {
    "json": JSONSerializer(),
    "yaml": YAMLSerializer(),
    "toml": TOMLSerializer(),
}


def get_serializer(codec: Union[str, Serializer]) -> Serializer:
    """Return the serializer registered under `codec`, or `codec` itself.

    Raises `ValueError` for unknown names.
    """
    if not isinstance(codec, str):
        return codec
    try:
        return SERIALIZERS[codec.lower()]
    except KeyError:
        raise ValueError(f"Unknown serializer {codec!r}; expected one of {sorted(SERIALIZERS)}") from None
