# pyreactive/__init__.py
from .core import ComponentNode, render_tree, print_last_trace
from .config import Settings, load_settings, configure

__all__ = [
    "ComponentNode",
    "render_tree",
    "print_last_trace",
    "Settings",
    "load_settings",
    "configure",
]
