"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

VerdictKind: TypeAlias = Literal["pass", "fail", "indeterminate"]
NetworkErrorKind: TypeAlias = Literal["timeout", "connection_failed", "tls_failed", "other"]

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]
