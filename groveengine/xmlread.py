"""Reads id-keyed XML tables: each record's first child holds its integer id."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterator, Union

MISSING = "nofile"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_int(text: str | None) -> int:
    match = _LEADING_INT.match(text or "")
    if match is None:
        raise ValueError(f"record id is not an integer: {text!r}")
    return int(match.group(1))


def _value(text: str | None) -> str:
    if text is None or not text.strip():
        return MISSING
    return text.lstrip()


class XmlTable:
    """A mapping from record id to a dict of field name to text."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.data: dict[int, dict[str, str]] = {}
        self.load(path)

    def load(self, path: Union[str, Path]) -> None:
        """Read ``path`` and merge its records into the table."""
        path = Path(path)
        with path.open(encoding="utf-8") as handle:
            source = "".join(line.rstrip("\r\n") for line in handle)
        try:
            root = ET.fromstring(source)
        except ET.ParseError as exc:
            raise ValueError(f"{path}: {exc}") from exc
        for record in root:
            fields = list(record)
            if not fields:
                continue
            row = self.data.setdefault(_to_int(fields[0].text), {})
            for field in fields:
                row[field.tag] = _value(field.text)

    def __getitem__(self, key: int) -> dict[str, str]:
        return self.data[key]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self.data))

    def __len__(self) -> int:
        return len(self.data)