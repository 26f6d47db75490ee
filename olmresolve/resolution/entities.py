"""Bundle entities with lazily decoded properties."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from typing import Any

from .model import Entity
from .versions import SemverError, Version, VersionRange, parse_range, parse_version

PROPERTY_PACKAGE = "olm.package"
PROPERTY_CHANNEL = "olm.channel"
PROPERTY_GVK = "olm.gvk"
PROPERTY_GVK_REQUIRED = "olm.gvk.required"
PROPERTY_PACKAGE_REQUIRED = "olm.package.required"
PROPERTY_BUNDLE_PATH = "olm.bundle.path"
PROPERTY_BUNDLE_MEDIA_TYPE = "olm.bundle.mediatype"

MEDIA_TYPE_PLAIN = "plain+v0"
MEDIA_TYPE_REGISTRY = "registry+v1"

_JSON_STARTS = set('{["-0123456789tfn')


class PropertyError(ValueError):
    """Raised when a bundle property is missing or cannot be decoded."""


@dataclass(frozen=True)
class GVK:
    group: str = ""
    version: str = ""
    kind: str = ""

    def __str__(self) -> str:
        return f'group:"{self.group}" version:"{self.version}" kind:"{self.kind}"'


@dataclass(frozen=True)
class GVKRequired:
    group: str = ""
    version: str = ""
    kind: str = ""

    def __str__(self) -> str:
        return f'group:"{self.group}" version:"{self.version}" kind:"{self.kind}"'

    def as_gvk(self) -> GVK:
        return GVK(self.group, self.version, self.kind)


@dataclass
class PackageRequired:
    package_name: str = ""
    version_range: str = ""
    semver_range: VersionRange | None = field(default=None, compare=False, repr=False)


@dataclass
class ChannelProperties:
    channel_name: str = ""
    priority: int = 0
    replaces: str = ""
    skips: list[str] = field(default_factory=list)
    skip_range: str = ""


@dataclass
class _Package:
    package_name: str = ""
    version: str = ""


def _decode(text: str) -> Any:
    stripped = text.lstrip(" \t\r\n")
    if not stripped:
        raise ValueError("unexpected end of JSON input")
    if stripped[0] not in _JSON_STARTS:
        raise ValueError(f"invalid character '{stripped[0]}' looking for beginning of value")

    def reject(name: str) -> Any:
        raise ValueError(f"invalid character '{name[0]}' looking for beginning of value")

    try:
        return json.loads(text, parse_constant=reject)
    except json.JSONDecodeError as exc:
        if exc.pos >= len(text):
            raise ValueError("unexpected end of JSON input") from None
        raise ValueError(f"invalid character '{text[exc.pos]}' {exc.msg.lower()}") from None


def _mismatch(value: Any, target: str) -> ValueError:
    kind = {dict: "object", list: "array", str: "string", bool: "bool"}.get(type(value), "number")
    return ValueError(f"json: cannot unmarshal {kind} into value of type {target}")


def _str(obj: dict, key: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _mismatch(value, "string")
    return value


def _obj(value: Any, target: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise _mismatch(value, target)
    return value


def _list(value: Any, target: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise _mismatch(value, target)
    return value


def _as_package(value: Any) -> _Package:
    obj = _obj(value, "Package")
    return _Package(_str(obj, "packageName"), _str(obj, "version"))


def _as_gvks(value: Any, cls: type) -> list:
    result = []
    for item in _list(value, f"[]{cls.__name__}"):
        obj = _obj(item, cls.__name__)
        result.append(cls(_str(obj, "group"), _str(obj, "version"), _str(obj, "kind")))
    return result


def _as_required_packages(value: Any) -> list[PackageRequired]:
    result = []
    for item in _list(value, "[]PackageRequired"):
        obj = _obj(item, "PackageRequired")
        result.append(PackageRequired(_str(obj, "packageName"), _str(obj, "versionRange")))
    return result


def _as_string_list(value: Any) -> list[str]:
    items = _list(value, "[]string")
    for item in items:
        if not isinstance(item, str):
            raise _mismatch(item, "string")
    return list(items)


def _as_channel(value: Any) -> ChannelProperties:
    obj = _obj(value, "ChannelProperties")
    priority = obj.get("priority", 0)
    if priority is None:
        priority = 0
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise _mismatch(priority, "int")
    return ChannelProperties(
        _str(obj, "channelName"),
        priority,
        _str(obj, "replaces"),
        _as_string_list(obj.get("skips")),
        _str(obj, "skipRange"),
    )


def _as_string(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _mismatch(value, "string")
    return value


class BundleEntity:
    """An entity whose bundle properties are decoded on first use."""

    def __init__(self, entity: Entity) -> None:
        self.entity = entity
        self._lock = threading.RLock()
        self._package: _Package | None = None
        self._version: Version | None = None
        self._provided_gvks: list[GVK] | None = None
        self._required_gvks: list[GVKRequired] | None = None
        self._required_packages: list[PackageRequired] | None = None
        self._channel: ChannelProperties | None = None
        self._bundle_path = ""
        self._media_type = ""

    @property
    def id(self) -> str:
        return self.entity.id

    @property
    def properties(self) -> dict[str, str]:
        return self.entity.properties

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BundleEntity):
            return NotImplemented
        return self.entity == other.entity

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BundleEntity({self.entity!r})"

    def _load(self, name: str, required: bool, convert, context: str) -> Any:
        value = self.entity.properties.get(name)
        try:
            if value is None:
                if required:
                    raise PropertyError(f"required property '{name}' not found")
                return convert(None)
            try:
                return convert(_decode(value))
            except ValueError as exc:
                raise PropertyError(
                    f"property '{name}' ('{value}') could not be parsed: {exc}"
                ) from None
        except PropertyError as exc:
            raise PropertyError(f"{context} for entity '{self.id}': {exc}") from None

    def _load_package(self) -> None:
        with self._lock:
            if self._package is not None:
                return
            package = self._load(
                PROPERTY_PACKAGE, True, _as_package, "error determining package"
            )
            try:
                version = parse_version(package.version)
            except SemverError as exc:
                raise PropertyError(
                    f"could not parse semver ({package.version}) for entity '{self.id}': {exc}"
                ) from None
            self._package, self._version = package, version

    def package_name(self) -> str:
        self._load_package()
        return self._package.package_name  # type: ignore[union-attr]

    def version(self) -> Version:
        self._load_package()
        return self._version  # type: ignore[return-value]

    def provided_gvks(self) -> list[GVK]:
        with self._lock:
            if self._provided_gvks is None:
                self._provided_gvks = self._load(
                    PROPERTY_GVK,
                    False,
                    lambda v: _as_gvks(v, GVK),
                    "error determining bundle provided gvks",
                )
            return self._provided_gvks

    def required_gvks(self) -> list[GVKRequired]:
        with self._lock:
            if self._required_gvks is None:
                self._required_gvks = self._load(
                    PROPERTY_GVK_REQUIRED,
                    False,
                    lambda v: _as_gvks(v, GVKRequired),
                    "error determining bundle required gvks",
                )
            return self._required_gvks

    def required_packages(self) -> list[PackageRequired]:
        with self._lock:
            if self._required_packages is None:
                packages = self._load(
                    PROPERTY_PACKAGE_REQUIRED,
                    False,
                    _as_required_packages,
                    "error determining bundle required packages",
                )
                for package in packages:
                    try:
                        package.semver_range = parse_range(package.version_range)
                    except SemverError as exc:
                        raise PropertyError(
                            "error determining bundle required package semver range "
                            f"for entity '{self.id}': '{exc}'"
                        ) from None
                self._required_packages = packages
            return self._required_packages

    def channel_properties(self) -> ChannelProperties:
        with self._lock:
            if self._channel is None:
                self._channel = self._load(
                    PROPERTY_CHANNEL,
                    True,
                    _as_channel,
                    "error determining bundle channel properties",
                )
            return self._channel

    def channel_name(self) -> str:
        return self.channel_properties().channel_name

    def bundle_path(self) -> str:
        with self._lock:
            if not self._bundle_path:
                self._bundle_path = self._load(
                    PROPERTY_BUNDLE_PATH, True, _as_string, "error determining bundle path"
                )
            return self._bundle_path

    def media_type(self) -> str:
        with self._lock:
            if not self._media_type:
                self._media_type = self._load(
                    PROPERTY_BUNDLE_MEDIA_TYPE,
                    False,
                    _as_string,
                    "error determining bundle mediatype",
                )
            return self._media_type