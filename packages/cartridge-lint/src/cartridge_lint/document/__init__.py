"""Cartridge document parsing: front matter split, code fences and section index."""

from .fences import CodeBlock, find_code_blocks
from .front_matter import CartridgeDocument, split_document
from .sections import Section, SectionIndex

__all__ = [
    "CartridgeDocument",
    "CodeBlock",
    "Section",
    "SectionIndex",
    "find_code_blocks",
    "split_document",
]
