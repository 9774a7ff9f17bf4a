from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Optional

from ..core.exceptions import ValidationError
from .model import StatusDefinition


class StatusRegistry:
    """Per-workspace set of statuses, keyed by an open string key.

    Keys are user-extensible (CUSTOM workspaces), so this is a mapping
    rather than an enum. Unknown keys resolve to None and are left out of
    every aggregation.
    """

    def __init__(self, definitions: Iterable[StatusDefinition] = ()):
        self._by_key: dict[str, StatusDefinition] = {}
        for d in definitions:
            if d.key in self._by_key:
                raise ValidationError(f"Duplicate status key: {d.key}")
            self._by_key[d.key] = d

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping]) -> "StatusRegistry":
        definitions = []
        for key, raw in (data or {}).items():
            if not isinstance(raw, Mapping):
                raise ValidationError(f"Status {key} must be an object")
            definitions.append(
                StatusDefinition(
                    key=str(key),
                    label=str(raw.get("label") or key),
                    weight=raw.get("weight", 0),
                    color=raw.get("color"),
                )
            )
        return cls(definitions)

    def to_mapping(self) -> dict[str, dict]:
        out: dict[str, dict] = {}
        for d in self._by_key.values():
            entry: dict = {"label": d.label, "weight": d.weight}
            if d.color is not None:
                entry["color"] = d.color
            out[d.key] = entry
        return out

    def lookup(self, key: str) -> Optional[StatusDefinition]:
        return self._by_key.get(key)

    def keys(self) -> list[str]:
        return list(self._by_key)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[StatusDefinition]:
        return iter(self._by_key.values())

    def __len__(self) -> int:
        return len(self._by_key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StatusRegistry):
            return NotImplemented
        return list(self._by_key.values()) == list(other._by_key.values())

    def __repr__(self) -> str:
        return f"StatusRegistry({self.keys()!r})"
