"""Shared runtime helpers: context, logging, serialization, YAML and schema loading."""

from .context import LintContext
from .logging import log_event
from .serialize import dumps_json

__all__ = ["LintContext", "dumps_json", "log_event"]
