from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

GERMAIN = "Germain"
SAFE = "Safe"
PRIME = "Prime"

# Output order of labels inside a tag set
TAG_ORDER: tuple[str, ...] = (GERMAIN, SAFE, PRIME)


@dataclass(frozen=True)
class Tags:
    """
    Classification tag set of one integer.

    Labels are kept in TAG_ORDER, so equality of two Tags is equality of
    their label sets. Serialized as a JSON list: ["Germain", "Prime"].
    """
    labels: tuple[str, ...] = ()

    @classmethod
    def of(cls, labels: Iterable[str]) -> Tags:
        wanted = set(labels)
        unknown = wanted.difference(TAG_ORDER)
        if unknown:
            raise ValueError(f"Unknown tag(s): {', '.join(sorted(unknown))}")
        return cls(tuple(lbl for lbl in TAG_ORDER if lbl in wanted))

    @classmethod
    def parse(cls, text: str) -> Tags:
        """Inverse of str(): parse a JSON list of labels."""
        raw = json.loads(text)
        if not isinstance(raw, list) or not all(isinstance(s, str) for s in raw):
            raise ValueError(f"Not a tag list: {text!r}")
        return cls.of(raw)

    def __contains__(self, label: object) -> bool:
        return label in self.labels

    def __iter__(self) -> Iterator[str]:
        return iter(self.labels)

    def __len__(self) -> int:
        return len(self.labels)

    def __str__(self) -> str:
        return json.dumps(list(self.labels))

    @property
    def is_prime(self) -> bool:
        return PRIME in self.labels


@dataclass(frozen=True)
class SearchRecord:
    # --- the triple and its candidate ---
    x: int
    y: int
    z: int
    n: int

    # --- tag sets, n first ---
    tags_n: Tags
    tags_x: Tags
    tags_y: Tags
    tags_z: Tags

    def as_row(self) -> list[str]:
        """CSV row: decimal integers without grouping, tag sets as JSON lists."""
        return [
            str(self.x), str(self.y), str(self.z), str(self.n),
            str(self.tags_n), str(self.tags_x), str(self.tags_y), str(self.tags_z),
        ]

    @classmethod
    def from_row(cls, row: list[str]) -> SearchRecord:
        if len(row) != len(FIELDS):
            raise ValueError(f"Expected {len(FIELDS)} fields, got {len(row)}")
        x, y, z, n = (int(v) for v in row[:4])
        tn, tx, ty, tz = (Tags.parse(v) for v in row[4:])
        return cls(x, y, z, n, tn, tx, ty, tz)


FIELDS: tuple[str, ...] = (
    "x", "y", "z", "n",
    "classifications_n", "classifications_x", "classifications_y", "classifications_z",
)
