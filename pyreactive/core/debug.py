"""Debug helpers for inspecting component trees and update traces.

This module intentionally avoids importing from ``pyreactive.core.component``
to prevent circular imports. Functions operate on any object that exposes the
expected attributes: ``name``, optional ``key``, ``props``, ``state`` and
``children`` (iterable of similar nodes).

Tracing is off by default. While it is on, every ``set_state`` and
``force_update`` opens a trace (or joins the one already active) and the
component records each protocol step into it.
"""

import time
from contextvars import ContextVar
from typing import Any, Dict, List, Optional, Tuple

# ANSI constants (single source for this module)
RESET = "\x1b[0m"
BOLD = "\x1b[1m"
DIM = "\x1b[2m"
FG_GRAY = "\x1b[90m"
FG_YELLOW = "\x1b[33m"
FG_MAGENTA = "\x1b[35m"
FG_CYAN = "\x1b[36m"
FG_BLUE = "\x1b[34m"
FG_GREEN = "\x1b[32m"

_ANSI_NAMES = ("RESET", "BOLD", "DIM", "FG_GRAY", "FG_YELLOW", "FG_MAGENTA",
               "FG_CYAN", "FG_BLUE", "FG_GREEN")


def _palette(color: bool) -> Dict[str, str]:
    if not color:
        return {name: "" for name in _ANSI_NAMES}
    return {name: globals()[name] for name in _ANSI_NAMES}


def _fmt_val(v: Any, p: Dict[str, str], depth: int = 0) -> str:
    if depth > 1:
        return f"{p['DIM']}…{p['RESET']}"
    if v is None or isinstance(v, bool):
        return f"{p['FG_CYAN']}{v!r}{p['RESET']}"
    if isinstance(v, (int, float)):
        return f"{p['FG_BLUE']}{v!r}{p['RESET']}"
    if isinstance(v, str):
        s = v.replace("\n", "\\n")
        text = s if len(s) <= 60 else s[:57] + "…"
        return f"{p['FG_YELLOW']}{text!r}{p['RESET']}"
    if isinstance(v, (list, tuple)):
        return f"{p['FG_CYAN']}[{len(v)}]{p['RESET']}"
    if isinstance(v, dict):
        items = []
        for i, (k, val) in enumerate(v.items()):
            if i >= 5:
                items.append(f"{p['DIM']}…{p['RESET']}")
                break
            items.append(f"{p['FG_CYAN']}{k}{p['RESET']}={_fmt_val(val, p, depth + 1)}")
        return "{" + ", ".join(items) + "}"
    if callable(v):
        name = getattr(v, "__name__", None) or type(v).__name__
        return f"{p['FG_GREEN']}<fn {name}>{p['RESET']}"
    return f"{p['FG_GREEN']}<{type(v).__name__}>{p['RESET']}"


def format_tree(node: Any, indent: int = 0, *, color: bool = False) -> str:
    """Return the tree below ``node`` as text, one line per node."""
    p = _palette(color)
    lines: List[str] = []

    def _visit(n: Any, level: int) -> None:
        pad = "  " * level
        name = getattr(n, "name", type(n).__name__)
        line = f"{pad}{p['FG_GRAY']}-{p['RESET']} {p['FG_MAGENTA']}{name}{p['RESET']}"
        key = getattr(n, "key", None)
        if key:
            line += f" {p['FG_GRAY']}key={p['RESET']}{p['FG_YELLOW']}{key!r}{p['RESET']}"
        props = getattr(n, "props", None)
        if props:
            line += f" {p['FG_GRAY']}props={p['RESET']}{_fmt_val(props, p)}"
        state = getattr(n, "state", None)
        if state:
            line += f" {p['FG_GRAY']}state={p['RESET']}{_fmt_val(state, p)}"
        lines.append(line)
        for ch in getattr(n, "children", []) or []:
            _visit(ch, level + 1)

    _visit(node, indent)
    return "\n".join(lines)


def render_tree(node: Any, indent: int = 0) -> None:
    """Pretty-print the tree starting at ``node`` to stdout."""
    print(format_tree(node, indent, color=True))


# ----------------------------------------------------------------------------
# Update trace instrumentation
# ----------------------------------------------------------------------------

_TRACE_CTX: ContextVar[Optional[Dict[str, Any]]] = ContextVar(
    "_TRACE_CTX", default=None
)
_TRACE_DEPTH: ContextVar[int] = ContextVar("_TRACE_DEPTH", default=0)
_TRACE_ENABLED: bool = False

# Keep a log of recent traces (each trace is a dict with events)
_TRACE_LOG: List[Dict[str, Any]] = []
_TRACE_LOG_LIMIT = 50


def _new_trace(root: Any, reason: Optional[str]) -> Dict[str, Any]:
    trace = {
        "id": f"tr-{int(time.time() * 1000)}-{id(root)}",
        "root_id": id(root),
        "root_name": getattr(root, "name", type(root).__name__),
        "root_key": getattr(root, "key", None),
        "reason": reason,
        "ts": time.time(),
        "events": [],
    }
    _TRACE_LOG.append(trace)
    if len(_TRACE_LOG) > _TRACE_LOG_LIMIT:
        del _TRACE_LOG[:-_TRACE_LOG_LIMIT]
    return trace


def start_trace(root: Any, reason: Optional[str] = None) -> Optional[Tuple[Any, Any]]:
    """Open a trace for ``root``, or go one level deeper in the active one.

    Returns a token for ``end_trace`` (``None`` while tracing is disabled).
    """
    if not _TRACE_ENABLED:
        return None
    if _TRACE_CTX.get() is not None:
        return None, _TRACE_DEPTH.set(_TRACE_DEPTH.get() + 1)
    ctx_token = _TRACE_CTX.set(_new_trace(root, reason))
    return ctx_token, _TRACE_DEPTH.set(0)


def end_trace(token: Optional[Tuple[Any, Any]]) -> None:
    if token is None:
        return
    ctx_token, depth_token = token
    _TRACE_DEPTH.reset(depth_token)
    if ctx_token is not None:
        _TRACE_CTX.reset(ctx_token)


def record_event(node: Any, kind: str, **data: Any) -> None:
    """Append an event to the active trace.

    Outside of an update (e.g. child management called directly) the event
    gets a trace of its own.
    """
    if not _TRACE_ENABLED:
        return
    trace = _TRACE_CTX.get()
    if trace is None:
        trace = _new_trace(node, kind)
    event = {
        "t": time.time(),
        "kind": kind,
        "depth": _TRACE_DEPTH.get(),
        "node_id": id(node),
        "name": getattr(node, "name", type(node).__name__),
        "key": getattr(node, "key", None),
    }
    event.update(data)
    trace["events"].append(event)


def get_traces() -> List[Dict[str, Any]]:
    return list(_TRACE_LOG)


def print_last_trace() -> None:
    if not _TRACE_LOG:
        print(f"{FG_GRAY}[debug]{RESET} no update trace available yet.")
        return
    trace = _TRACE_LOG[-1]
    print(f"\n{BOLD}{FG_CYAN}=== Update Trace ==={RESET}")
    print(f"{FG_GRAY}root:{RESET} {FG_YELLOW}{trace['root_name']}{RESET}")
    if trace["reason"]:
        print(f"{FG_GRAY}reason:{RESET} {FG_YELLOW}{trace['reason']}{RESET}")
    for ev in trace["events"]:
        pad = "  " * int(ev.get("depth", 0))
        key = ev.get("key")
        key_part = f" key={key!r}" if key else ""
        extra = {
            k: v for k, v in ev.items()
            if k not in ("t", "kind", "depth", "node_id", "name", "key")
        }
        extra_part = f" {FG_GRAY}{extra}{RESET}" if extra else ""
        print(f"{pad}- {ev['kind']}: {ev['name']}{key_part}{extra_part}")
    print(f"{BOLD}{FG_CYAN}===================={RESET}\n")


def enable_tracing() -> None:
    global _TRACE_ENABLED
    _TRACE_ENABLED = True


def disable_tracing() -> None:
    global _TRACE_ENABLED
    _TRACE_ENABLED = False


def is_tracing_enabled() -> bool:
    return _TRACE_ENABLED


def set_trace_limit(limit: int) -> None:
    global _TRACE_LOG_LIMIT
    if limit < 1:
        raise ValueError(f"trace limit must be at least 1, got {limit}")
    _TRACE_LOG_LIMIT = limit
    if len(_TRACE_LOG) > limit:
        del _TRACE_LOG[:-limit]


def clear_traces() -> None:
    del _TRACE_LOG[:]
