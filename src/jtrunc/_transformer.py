"""Tree-walking string transformation over decoded JSON values."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any
from typing import Final

logger = logging.getLogger(__name__)

DEFAULT_MASK: Final = "xxx"


class Container(Enum):
    """Kind of container a string value was found in."""

    OBJECT = "object"
    ARRAY = "array"


@dataclass(frozen=True)
class KVInfo:
    """
    Describes one string value handed to a string transformer.

    ``key`` is the object member the value belongs to. Array elements
    inherit the key of the closest enclosing member, or ``""`` when the
    array is the document itself.
    """

    is_top_level: bool
    inside: Container
    key: str
    value: str


StringTransformer = Callable[[KVInfo], str]
MaskFunc = Callable[[str], str]
Loads = Callable[[Any], Any]
Dumps = Callable[[Any], str | bytes]


def default_string_transformer(info: KVInfo) -> str:
    """Leaves every value as it is."""
    return info.value


def default_mask(value: str) -> str:
    return DEFAULT_MASK


def _compact_dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class Transformer:
    """Applies a string callback to every string leaf of a JSON document.

    Only objects and arrays are walked. A document that is a bare scalar,
    a bare string included, is returned unchanged, as are numbers,
    booleans and nulls inside containers.
    """

    def __init__(
        self,
        string_transformer: StringTransformer | None = None,
        loads: Loads | None = None,
        dumps: Dumps | None = None,
    ) -> None:
        """Initialize the transformer.

        Args:
            string_transformer: Callback returning the replacement value
            loads: Decoder used by ``transform_bytes`` (default json.loads)
            dumps: Encoder used by ``transform_bytes`` (default compact
                json.dumps)
        """
        if string_transformer is not None and not callable(string_transformer):
            raise TypeError("string_transformer must be callable")

        self.string_transformer: Final = (
            string_transformer or default_string_transformer
        )
        self.loads: Final = loads or json.loads
        self.dumps: Final = dumps or _compact_dumps

    def transform_bytes(self, data: bytes | str) -> bytes:
        """Decode, transform and re-encode a JSON document.

        Decoder errors are raised as the decoder raises them.
        """
        decoded = self.loads(data)
        encoded = self.dumps(self.transform(decoded))
        if isinstance(encoded, str):
            encoded = encoded.encode("utf-8")

        logger.debug(
            "Transformed JSON document: %d bytes in, %d bytes out",
            len(data),
            len(encoded),
        )
        return encoded

    def transform(self, value: Any) -> Any:
        """Return a transformed copy of an already decoded document."""
        if isinstance(value, dict):
            return self._walk_object(value, top_level=True)
        if isinstance(value, list):
            return self._walk_array(value, "", top_level=True)
        return value

    def _walk_object(
        self, obj: dict[str, Any], *, top_level: bool
    ) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, item in obj.items():
            if isinstance(item, str):
                result[key] = self.string_transformer(
                    KVInfo(top_level, Container.OBJECT, key, item)
                )
            elif isinstance(item, dict):
                result[key] = self._walk_object(item, top_level=False)
            elif isinstance(item, list):
                result[key] = self._walk_array(item, key, top_level=False)
            else:
                result[key] = item
        return result

    def _walk_array(
        self, items: list[Any], key: str, *, top_level: bool
    ) -> list[Any]:
        result: list[Any] = []
        for item in items:
            if isinstance(item, str):
                result.append(
                    self.string_transformer(
                        KVInfo(top_level, Container.ARRAY, key, item)
                    )
                )
            elif isinstance(item, dict):
                result.append(self._walk_object(item, top_level=False))
            elif isinstance(item, list):
                # Nested arrays keep the key of the enclosing member
                result.append(self._walk_array(item, key, top_level=False))
            else:
                result.append(item)
        return result


class Masking:
    """Masks the string values stored under selected keys.

    Strings sitting directly in a top-level array have no key and are
    never masked.
    """

    def __init__(
        self,
        keys: Mapping[str, MaskFunc | None] | Iterable[str],
        loads: Loads | None = None,
        dumps: Dumps | None = None,
    ) -> None:
        """Initialize masking rules.

        Args:
            keys: Key names mapped to a mask callable, or to None for the
                default mask. A plain iterable of names uses the default
                mask for all of them.
            loads: Decoder used by ``mask_bytes``
            dumps: Encoder used by ``mask_bytes``
        """
        if isinstance(keys, str | bytes):
            raise TypeError(
                "keys must be a mapping or an iterable of key names, "
                f"not {type(keys).__name__}"
            )

        if isinstance(keys, Mapping):
            pairs = list(keys.items())
        else:
            pairs = [(name, None) for name in keys]

        self.keys: dict[str, MaskFunc] = {}
        for name, mask_func in pairs:
            if mask_func is not None and not callable(mask_func):
                raise TypeError(f"mask for key {name!r} must be callable")
            self.keys[name] = mask_func or default_mask

        self._transformer = Transformer(self._mask_value, loads, dumps)

    def _mask_value(self, info: KVInfo) -> str:
        if info.is_top_level and info.inside is Container.ARRAY:
            return info.value

        mask_func = self.keys.get(info.key)
        if mask_func is None:
            return info.value
        return mask_func(info.value)

    def mask(self, value: Any) -> Any:
        """Return a masked copy of an already decoded document."""
        return self._transformer.transform(value)

    def mask_bytes(self, data: bytes | str) -> bytes:
        """Decode, mask and re-encode a JSON document."""
        return self._transformer.transform_bytes(data)
