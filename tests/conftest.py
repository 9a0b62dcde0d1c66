"""Shared fixtures for pyreactive tests."""

import os

import pytest

from pyreactive.core import ComponentNode, debug


class RecordingNode(ComponentNode):
    """Component that records every hook and render call into ``calls``."""

    def __init__(self, key="", props=None, children=None, *, gate=True):
        self.calls = []
        self.gate = gate
        super().__init__(key, props, children)

    def should_update(self, next_props, next_state):
        self.calls.append(("should_update", dict(next_state)))
        return self.gate

    def before_update(self, next_props, next_state):
        self.calls.append(("before_update", dict(next_state)))

    def render(self, forced=False):
        self.calls.append(("render", forced, dict(self.state)))

    def after_update(self, prev_props, prev_state):
        self.calls.append(("after_update", dict(prev_state)))

    def kinds(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def make_node():
    def _make(key="", props=None, children=None, **kwargs):
        return RecordingNode(key, props, children, **kwargs)

    return _make


@pytest.fixture
def tracing():
    debug.clear_traces()
    debug.set_trace_limit(50)
    debug.enable_tracing()
    yield debug
    debug.disable_tracing()
    debug.clear_traces()
    debug.set_trace_limit(50)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv("PYREACTIVE_TRACE", raising=False)
    monkeypatch.delenv("PYREACTIVE_TRACE_LIMIT", raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    # load_dotenv writes straight into os.environ
    os.environ.pop("PYREACTIVE_TRACE", None)
    os.environ.pop("PYREACTIVE_TRACE_LIMIT", None)
    debug.disable_tracing()
    debug.set_trace_limit(50)
