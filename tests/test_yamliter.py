import pytest

from upfkit.log import UtltError
from upfkit.yamliter import NodeType, YamlIter

DOC = "name: upf\nports: [8805, 2152]\nnested:\n  a: b\n"


def test_root_mapping_type():
    assert YamlIter.load(DOC).type() == NodeType.MAPPING


def test_walk_mapping_keys_and_values():
    it = YamlIter.load(DOC)
    assert it.advance() is True
    assert it.key() == "name"
    assert it.value() == "upf"
    assert it.advance() is True
    assert it.key() == "ports"


def test_non_scalar_value_raises():
    it = YamlIter.load(DOC)
    it.advance()
    it.advance()
    with pytest.raises(UtltError, match="SCALAR"):
        it.value()


def test_child_sequence_items():
    it = YamlIter.load(DOC)
    it.advance()
    it.advance()
    child = it.child()
    assert child.type() == NodeType.SEQUENCE
    assert [c.value() for c in child] == ["8805", "2152"]


def test_nested_mapping_child():
    it = YamlIter.load(DOC)
    keys = []
    for cur in it:
        keys.append(cur.key())
        if cur.key() == "nested":
            inner = cur.child()
            assert inner.advance()
            assert (inner.key(), inner.value()) == ("a", "b")
    assert keys == ["name", "ports", "nested"]


def test_advance_stays_false_at_end():
    it = YamlIter.load("[x]")
    assert it.advance() is True
    assert it.advance() is False
    assert it.advance() is False


def test_scalar_document():
    it = YamlIter.load("hello")
    assert it.type() == NodeType.SCALAR
    assert it.key() == "hello"
    assert it.value() == "hello"
    assert it.advance() is False
    with pytest.raises(UtltError):
        it.child()


def test_access_before_advance_raises():
    it = YamlIter.load("a: b")
    with pytest.raises(UtltError):
        it.key()


def test_empty_document_raises():
    with pytest.raises(UtltError):
        YamlIter.load("")


def test_invalid_yaml_raises():
    with pytest.raises(UtltError):
        YamlIter.load("a: [")