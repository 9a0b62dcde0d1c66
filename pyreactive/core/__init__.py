# pyreactive/core/__init__.py
from .component import ComponentNode
from .debug import (
    render_tree,
    format_tree,
    print_last_trace,
    enable_tracing,
    disable_tracing,
    is_tracing_enabled,
    clear_traces,
    get_traces,
)

__all__ = [
    "ComponentNode",
    "render_tree",
    "format_tree",
    "print_last_trace",
    "enable_tracing",
    "disable_tracing",
    "is_tracing_enabled",
    "clear_traces",
    "get_traces",
]
