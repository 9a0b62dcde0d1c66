# component.py ----------------------------------------------------
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional
import weakref
import warnings

from .debug import record_event, start_trace, end_trace


class ComponentNode:
    """Base class for a stateful component living in a keyed tree.

    Subclasses must implement ``render(forced)``. ``should_update``,
    ``before_update`` and ``after_update`` are optional extension points.
    """

    def __init__(
        self,
        key: str = "",
        props: Optional[Dict[str, Any]] = None,
        children: Optional[Iterable["ComponentNode"]] = None,
    ) -> None:
        self._key = key
        self._props = props or {}
        self._state: Dict[str, Any] = {}
        self._children: List["ComponentNode"] = []
        self._parent_ref: Optional[weakref.ref] = None
        self.name: str = type(self).__name__

        if children:
            self.add_children(children)

    # ---------------- Accessors ----------------
    @property
    def key(self) -> str:
        return self._key

    @property
    def props(self) -> Dict[str, Any]:
        return self._props

    @property
    def state(self) -> Dict[str, Any]:
        return self._state

    @state.setter
    def state(self, next_state: Dict[str, Any]) -> None:
        # merges, never replaces
        self.set_state(next_state)

    @property
    def children(self) -> List["ComponentNode"]:
        return self._children

    @property
    def parent(self) -> Optional["ComponentNode"]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @parent.setter
    def parent(self, parent: Optional["ComponentNode"]) -> None:
        self._parent_ref = weakref.ref(parent) if parent is not None else None

    # ---------------- Extension points ----------------
    def should_update(self, next_props, next_state) -> bool:
        """Gate consulted by ``set_state`` before any hook or render runs.

        Returns True by default so that state mutated in place still gets
        re-rendered. Components that treat props and state as immutable can
        override this and compare ``next_props``/``next_state`` against
        ``self.props``/``self.state`` to skip needless renders.
        """
        return True

    def before_update(self, next_props, next_state) -> None:
        """Runs right before an update renders. Not called for ``force_update``."""

    def after_update(self, prev_props, prev_state) -> None:
        """Runs right after an update rendered. Not called for ``force_update``."""

    def render(self, forced: bool = False) -> None:
        raise NotImplementedError(
            f"{type(self).__name__} must implement render(forced)"
        )

    # ---------------- Updating ----------------
    def set_state(
        self,
        partial_state: Optional[Dict[str, Any]],
        callback: Optional[Callable[[Dict[str, Any], Dict[str, Any]], None]] = None,
    ) -> None:
        """Shallow-merge ``partial_state`` into the current state.

        The merged state is committed whether or not ``should_update`` lets
        the render through. Hooks and ``render`` run before the commit, so
        inside ``render`` ``self.state`` still holds the previous state.
        ``callback(prev_state, props)`` runs last.
        """
        if partial_state is None:
            partial_state = {}
        if not isinstance(partial_state, Mapping):
            raise TypeError(
                f"set_state() expects a mapping, got {type(partial_state).__name__}"
            )

        prev_state = self._state
        next_state = {**prev_state, **partial_state}
        props = self._props

        token = start_trace(self, f"set_state {list(partial_state)}")
        try:
            allowed = self.should_update(props, next_state)
            record_event(self, "gate", allowed=bool(allowed))
            if allowed:
                record_event(self, "before_update")
                self.before_update(props, next_state)
                record_event(self, "render", forced=True)
                self.render(True)
                record_event(self, "after_update")
                self.after_update(props, prev_state)

            self._state = next_state
            record_event(self, "commit", keys=list(partial_state))
        finally:
            end_trace(token)

        if callback is not None:
            callback(prev_state, props)

    def force_update(self) -> None:
        token = start_trace(self, "force_update")
        try:
            record_event(self, "force_update")
            record_event(self, "render", forced=True)
            self.render(True)
        finally:
            end_trace(token)

    # ---------------- Children ----------------
    def add_child(self, child: Optional["ComponentNode"]) -> None:
        if child is None:
            return
        if not isinstance(child, ComponentNode):
            raise TypeError(
                f"add_child() expects a ComponentNode, got {type(child).__name__}"
            )
        if child is self or child in self.ancestors():
            raise ValueError(
                f"cannot add {child.name} key={child.key!r} below itself"
            )

        idx = self._index_of(child.key)
        if idx is not None and self._children[idx] is child:
            return

        old_parent = child.parent
        if old_parent is not None and old_parent is not self:
            old_parent._detach(child)

        if idx is None:
            self._children.append(child)
            child.parent = self
            record_event(self, "child_added", child_key=child.key)
            return

        # replace in place, keeping the sibling position
        displaced = self._children[idx]
        if child.key == "":
            warnings.warn(
                f"[ComponentNode] <{child.name}> with no explicit 'key' replaced "
                f"sibling <{displaced.name}> under <{self.name}>.",
                RuntimeWarning,
                stacklevel=2,
            )
        self._children[idx] = child
        child.parent = self
        if displaced.parent is self:
            displaced.parent = None
        record_event(self, "child_replaced", child_key=child.key, index=idx)

    def add_children(self, children: Iterable[Optional["ComponentNode"]]) -> None:
        for child in children:
            self.add_child(child)

    def remove_child(self, child: Optional["ComponentNode"]) -> None:
        if child is None:
            return
        self.remove_child_by_key(child.key)

    def remove_child_by_key(self, key: Optional[str]) -> Optional["ComponentNode"]:
        if key is None:
            return None
        idx = self._index_of(key)
        if idx is None:
            return None

        removed = self._children.pop(idx)
        if removed.parent is self:
            removed.parent = None
        record_event(self, "child_removed", child_key=key, index=idx)
        return removed

    def remove_children(self) -> None:
        old_children = self._children
        self._children = []
        for child in old_children:
            if child.parent is self:
                child.parent = None
        record_event(self, "children_cleared", count=len(old_children))

    def _detach(self, child: "ComponentNode") -> None:
        idx = self._index_of(child.key)
        if idx is not None and self._children[idx] is child:
            self.remove_child_by_key(child.key)

    def get_child(self, key: str) -> Optional["ComponentNode"]:
        idx = self._index_of(key)
        return None if idx is None else self._children[idx]

    def ancestors(self) -> Iterator["ComponentNode"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def walk(self) -> Iterator["ComponentNode"]:
        """Depth-first, pre-order: the node itself, then each subtree in order."""
        yield self
        for child in self._children:
            yield from child.walk()

    def _index_of(self, key: str) -> Optional[int]:
        for idx, child in enumerate(self._children):
            if child.key == key:
                return idx
        return None

    # ---------------- Container protocol ----------------
    def __iter__(self) -> Iterator["ComponentNode"]:
        return iter(list(self._children))

    def __len__(self) -> int:
        return len(self._children)

    def __bool__(self) -> bool:
        # a leaf is still a node
        return True

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._index_of(key) is not None

    def __repr__(self) -> str:
        return f"<{self.name} key={self._key!r} children={len(self._children)}>"

    # FOR DEBUGGING
    def render_tree(self, indent=0):
        from .debug import render_tree as _render_tree

        _render_tree(self, indent)
