from __future__ import annotations

import re
from dataclasses import dataclass

_OPENING_RE = re.compile(r"^[ ]{0,3}```[ \t]*([^\s`]*)")
_CLOSING_RE = re.compile(r"^[ ]{0,3}```[ \t]*$")


@dataclass(frozen=True)
class CodeBlock:
    language: str
    content: str
    start_line: int
    terminated: bool = True

    @property
    def tagged(self) -> bool:
        return bool(self.language)


def _fence_spans(lines: list[str]) -> list[tuple[int, int | None, str]]:
    """Pair fences as (opening index, closing index or None, language).

    A language-tagged fence can never close a block, so one seen inside an open
    block means that block was left unclosed and a new one starts here.
    """
    spans: list[tuple[int, int | None, str]] = []
    opened: int | None = None
    lang = ""
    for idx, line in enumerate(lines):
        match = _OPENING_RE.match(line)
        if opened is None:
            if match:
                opened, lang = idx, match.group(1).lower()
            continue
        if _CLOSING_RE.match(line):
            spans.append((opened, idx, lang))
            opened = None
        elif match and match.group(1):
            spans.append((opened, None, lang))
            opened, lang = idx, match.group(1).lower()
    if opened is not None:
        spans.append((opened, None, lang))
    return spans


def find_code_blocks(text: str, first_line: int = 1) -> list[CodeBlock]:
    """Pair opening and closing ``` fences; an unclosed fence runs to the next fence or end of text.

    `first_line` is the document line number of the first line of `text`.
    """
    lines = text.split("\n")
    spans = _fence_spans(lines)
    blocks: list[CodeBlock] = []
    for pos, (opened, closed, lang) in enumerate(spans):
        if closed is not None:
            stop = closed
        elif pos + 1 < len(spans):
            stop = spans[pos + 1][0]
        else:
            stop = len(lines)
        blocks.append(
            CodeBlock(
                language=lang,
                content="\n".join(lines[opened + 1:stop]),
                start_line=first_line + opened,
                terminated=closed is not None,
            )
        )
    return blocks


def fenced_line_mask(lines: list[str]) -> list[bool]:
    """True for every line inside a closed fenced block, fence markers included.

    A fence that never closes masks nothing, so headings after it still count.
    """
    mask = [False] * len(lines)
    for opened, closed, _lang in _fence_spans(lines):
        if closed is None:
            continue
        for pos in range(opened, closed + 1):
            mask[pos] = True
    return mask
