__version__ = "0.1.0"

__all__ = [
    "__version__",
    "checks",
    "cli",
    "core",
    "document",
    "engine",
    "errors",
    "exit_codes",
    "model",
    "registry",
]
