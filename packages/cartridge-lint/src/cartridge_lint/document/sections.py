from __future__ import annotations

from dataclasses import dataclass

from .fences import fenced_line_mask

HEADING_MARKER = "## "


@dataclass(frozen=True)
class Section:
    title: str
    position: int
    line: int
    heading_start: int
    start: int
    end: int


class SectionIndex:
    """Level-2 headings of a markdown body, tokenized once and sliced on demand.

    The first pass records each heading title with the character offsets of its
    content; lookups then slice the body between consecutive headings instead of
    rescanning it per query. Heading-looking lines inside fenced code blocks are
    sample content, not sections.
    """

    def __init__(self, body: str, first_line: int = 1) -> None:
        self.body = body
        self.first_line = first_line
        self.sections: tuple[Section, ...] = self._tokenize()

    def _tokenize(self) -> tuple[Section, ...]:
        lines = self.body.split("\n")
        mask = fenced_line_mask(lines)
        heads: list[tuple[str, int, int, int]] = []
        offset = 0
        for idx, line in enumerate(lines):
            next_offset = offset + len(line) + 1
            if not mask[idx] and line.startswith(HEADING_MARKER):
                title = line[len(HEADING_MARKER):].strip()
                heads.append((title, self.first_line + idx, offset, min(next_offset, len(self.body))))
            offset = next_offset
        out: list[Section] = []
        for pos, (title, lineno, heading_start, start) in enumerate(heads):
            end = heads[pos + 1][2] if pos + 1 < len(heads) else len(self.body)
            out.append(Section(title, pos, lineno, heading_start, start, end))
        return tuple(out)

    def titles(self) -> list[str]:
        return [section.title for section in self.sections]

    def find(self, name: str) -> Section | None:
        for section in self.sections:
            if section.title.startswith(name):
                return section
        return None

    def extract(self, name: str) -> str | None:
        """Text between the first heading starting with `name` and the next level-2 heading.

        Returns None when no such heading exists.
        """
        section = self.find(name)
        if section is None:
            return None
        return self.body[section.start:section.end]

