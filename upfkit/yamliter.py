"""Cursor-style iteration over a composed YAML node tree."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterator

import yaml

from upfkit.log import UtltError

__all__ = ["YamlIter", "NodeType"]


class NodeType(IntEnum):
    NO_NODE = 0
    SCALAR = 1
    SEQUENCE = 2
    MAPPING = 3


class YamlIter:
    """A cursor over the items of a sequence or the pairs of a mapping.

    The cursor starts before the first element; ``advance`` moves onto it.
    """

    def __init__(self, node: yaml.Node) -> None:
        if node is None:
            raise UtltError("The node of iter is NULL")
        self.node = node
        self._pos = -1

    @classmethod
    def load(cls, text: str) -> YamlIter:
        """Compose a YAML document and return an iterator on its root node."""
        try:
            root = yaml.compose(text, Loader=yaml.SafeLoader)
        except yaml.YAMLError as exc:
            raise UtltError(f"cannot parse yaml: {exc}") from exc
        return cls(root)

    def type(self) -> NodeType:
        """Kind of the node this iterator walks."""
        if isinstance(self.node, yaml.ScalarNode):
            return NodeType.SCALAR
        if isinstance(self.node, yaml.SequenceNode):
            return NodeType.SEQUENCE
        if isinstance(self.node, yaml.MappingNode):
            return NodeType.MAPPING
        return NodeType.NO_NODE

    def advance(self) -> bool:
        """Move to the next element; False once there is none."""
        if self.type() not in (NodeType.SEQUENCE, NodeType.MAPPING):
            return False
        count = len(self.node.value)
        if self._pos < count:
            self._pos += 1
        return self._pos < count

    def __iter__(self) -> Iterator[YamlIter]:
        while self.advance():
            yield self

    def _current(self):
        items = self.node.value
        if not 0 <= self._pos < len(items):
            raise UtltError("The iter is not on an element")
        return items[self._pos]

    def child(self) -> YamlIter:
        """An iterator on the current sequence item or mapping value."""
        kind = self.type()
        if kind == NodeType.SEQUENCE:
            return YamlIter(self._current())
        if kind == NodeType.MAPPING:
            return YamlIter(self._current()[1])
        raise UtltError("Unknown node type")

    def _get(self, want_value: bool) -> str:
        kind = self.type()
        if kind == NodeType.SCALAR:
            return self.node.value
        if kind == NodeType.SEQUENCE:
            node = self._current()
        elif kind == NodeType.MAPPING:
            node = self._current()[1 if want_value else 0]
        else:
            raise UtltError("Unknown node type")
        if not isinstance(node, yaml.ScalarNode):
            raise UtltError("The type of node is not YAML_SCALAR_NODE")
        return node.value

    def key(self) -> str:
        """The current mapping key, sequence item, or the scalar itself."""
        return self._get(False)

    def value(self) -> str:
        """The current mapping value, sequence item, or the scalar itself."""
        return self._get(True)