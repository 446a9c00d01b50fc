"""Sub-resource and header mappings used as signing input."""

from typing import Dict, Iterator, Mapping, Optional, Union
from collections.abc import Mapping as MappingABC
from ..utils.constants import SUB_RESOURCES
from ..utils.validators import (
    validate_header_name,
    validate_header_value,
    validate_resource_key,
)


def _render(items) -> str:
    parts = []
    for key, value in sorted(items, key=lambda item: item[0]):
        parts.append(key if value is None else f"{key}={value}")
    return "&".join(parts)


def canonicalize_resources(params: Optional[Mapping[str, Optional[str]]]) -> str:
    """
    Render sub-resource parameters as the canonical query string.

    Keys outside the provider allow-list are dropped, the rest are sorted by
    key and joined with ``&``. A key without value renders as the bare key.
    The result is both the URL query and the signed resource suffix.
    """
    if not params:
        return ""
    return _render((k, v) for k, v in params.items() if k in SUB_RESOURCES)


class ResourceParams(MappingABC):
    """Sub-resource parameters validated against the allow-list at construction."""

    def __init__(self, params: Optional[Mapping[str, Optional[str]]] = None, **kwargs: Optional[str]):
        merged: Dict[str, Optional[str]] = dict(params or {})
        merged.update(kwargs)
        self._params: Dict[str, Optional[str]] = {}
        for key, value in merged.items():
            validate_resource_key(key)
            self._params[key] = None if value is None else str(value)

    @classmethod
    def coerce(cls, params: Union["ResourceParams", Mapping[str, Optional[str]], None]) -> "ResourceParams":
        if isinstance(params, ResourceParams):
            return params
        return cls(params)

    def canonical(self) -> str:
        return _render(self._params.items())

    def __getitem__(self, key: str) -> Optional[str]:
        return self._params[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __repr__(self) -> str:
        return f"ResourceParams({self._params!r})"


class RequestHeaders(MappingABC):
    """Request headers validated for signing at construction."""

    def __init__(self, headers: Optional[Mapping[str, str]] = None, **kwargs: str):
        merged: Dict[str, str] = dict(headers or {})
        merged.update(kwargs)
        self._headers: Dict[str, str] = {}
        for name, value in merged.items():
            self._set(name, value)

    @classmethod
    def coerce(cls, headers: Union["RequestHeaders", Mapping[str, str], None]) -> "RequestHeaders":
        if isinstance(headers, RequestHeaders):
            return headers.copy()
        return cls(headers)

    def _set(self, name: str, value: str) -> None:
        validate_header_name(name)
        validate_header_value(name, value)
        # One entry per header regardless of case
        for existing in list(self._headers):
            if existing.lower() == name.lower():
                del self._headers[existing]
        self._headers[name] = value

    def set(self, name: str, value: str) -> None:
        self._set(name, value)

    def get_ci(self, name: str, default: str = "") -> str:
        """Case-insensitive lookup."""
        lowered = name.lower()
        for key, value in self._headers.items():
            if key.lower() == lowered:
                return value
        return default

    def copy(self) -> "RequestHeaders":
        return RequestHeaders(self._headers)

    def to_dict(self) -> Dict[str, str]:
        return dict(self._headers)

    def __getitem__(self, name: str) -> str:
        return self._headers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        redacted = {
            k: ("***" if k.lower() == "authorization" else v)
            for k, v in self._headers.items()
        }
        return f"RequestHeaders({redacted!r})"
