from __future__ import annotations

import re
from dataclasses import dataclass

_FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\n(.*?)^---[ \t]*$\n?", re.DOTALL | re.MULTILINE)


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


@dataclass(frozen=True)
class CartridgeDocument:
    text: str
    header_text: str | None
    body: str
    body_line_offset: int

    @property
    def has_front_matter(self) -> bool:
        return self.header_text is not None


def split_document(text: str) -> CartridgeDocument:
    """Split raw cartridge text into the `---` delimited header and the markdown body."""
    normalized = normalize_newlines(text)
    if normalized.startswith("\ufeff"):
        normalized = normalized[1:]
    match = _FRONT_MATTER_RE.match(normalized)
    if match is None:
        return CartridgeDocument(text=normalized, header_text=None, body=normalized, body_line_offset=0)
    consumed = match.group(0)
    return CartridgeDocument(
        text=normalized,
        header_text=match.group(1),
        body=normalized[match.end():],
        body_line_offset=consumed.count("\n"),
    )
