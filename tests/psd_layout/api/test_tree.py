import logging

import pytest

from psd_layout.api.layers import LayerRecord
from psd_layout.api.tree import RecordKind, build_tree, classify, is_end_group

from ..utils import end_group, layer, start_group

logger = logging.getLogger(__name__)


def names(records):
    return [record.name for record in records]


def test_document_order_scenario():
    flat = [layer("Leaf1"), end_group(), layer("Leaf2", 5, 5), start_group("Group1")]
    roots = build_tree(flat)
    assert names(roots) == ["Group1", "Leaf1"]
    assert names(roots[0].children) == ["Leaf2"]
    assert roots[0].is_group()
    assert roots[1].is_leaf()


def test_caller_list_untouched():
    flat = [layer("Leaf1"), end_group(), layer("Leaf2"), start_group("Group1")]
    expected = list(flat)
    build_tree(flat)
    assert flat == expected


def test_nested_groups():
    # Back-to-front: Outer { Inner { A }, B }, C
    flat = [
        layer("C"),
        end_group(),
        layer("B"),
        end_group(),
        layer("A"),
        start_group("Inner"),
        start_group("Outer"),
    ]
    roots = build_tree(flat)
    assert names(roots) == ["Outer", "C"]
    outer = roots[0]
    assert names(outer.children) == ["Inner", "B"]
    assert names(outer.children[0].children) == ["A"]
    assert outer.find("A") is outer.children[0].children[0]
    assert names(outer.descendants()) == ["Inner", "A", "B"]


@pytest.mark.parametrize("count", [1, 2, 5])
def test_balanced_groups(count):
    flat = []
    for index in range(count):
        flat.extend(
            [
                end_group(),
                layer("leaf-%d-b" % index),
                layer("leaf-%d-a" % index),
                start_group("group-%d" % index),
            ]
        )
    flat.append(layer("root-leaf"))
    flat.append(layer("empty", 0, 0))
    roots = build_tree(flat)

    groups = [r for r in roots if r.pixel_data_irrelevant]
    leaves = [c for r in roots for c in ([r] if r.is_leaf() else r.descendants())]
    assert len(groups) == count
    assert len(leaves) == 2 * count + 1


def test_none_input():
    assert build_tree(None) == []


def test_empty_input():
    assert build_tree([]) == []


def test_zero_area_dropped():
    roots = build_tree([layer("visible"), layer("empty", 10, 0), layer("thin", 0, 3)])
    assert names(roots) == ["visible"]


def test_copy_end_marker():
    flat = [
        LayerRecord(name=" copy", rect=(0, 0, 10, 0)),
        layer("Inside"),
        start_group("Group"),
    ]
    roots = build_tree(flat)
    assert names(roots) == ["Group"]
    assert names(roots[0].children) == ["Inside"]


def test_copy_with_height_is_content():
    record = LayerRecord(name=" copy", rect=(0, 0, 10, 10))
    assert classify(record) == RecordKind.CONTENT
    assert not is_end_group(LayerRecord(name="Title copy", rect=(0, 0, 10, 0)))


@pytest.mark.parametrize(
    "record, kind",
    [
        (LayerRecord(name="</Layer set>"), RecordKind.END_GROUP),
        (LayerRecord(name="Group </Layer group> 2"), RecordKind.END_GROUP),
        (LayerRecord(name="Group", pixel_data_irrelevant=True), RecordKind.START_GROUP),
        (LayerRecord(name="Layer", rect=(0, 0, 1, 1)), RecordKind.CONTENT),
        (LayerRecord(name="Layer"), RecordKind.EMPTY),
        (LayerRecord(name=None), RecordKind.EMPTY),
    ],
)
def test_classify(record, kind):
    assert classify(record) == kind


def test_unclosed_group(caplog):
    flat = [layer("Child"), start_group("Open")]
    with caplog.at_level(logging.WARNING):
        roots = build_tree(flat)
    assert names(roots) == ["Open"]
    assert names(roots[0].children) == ["Child"]
    assert "Unbalanced" in caplog.text


def test_unclosed_group_after_roots():
    flat = [layer("Child"), start_group("Open"), layer("Top")]
    roots = build_tree(flat)
    assert names(roots) == ["Top"]


def test_stray_end_marker(caplog):
    flat = [layer("Leaf"), end_group()]
    with caplog.at_level(logging.WARNING):
        roots = build_tree(flat)
    assert names(roots) == ["Leaf"]
    assert "end marker" in caplog.text


def test_rebuild_does_not_duplicate():
    flat = [end_group(), layer("Leaf"), start_group("Group")]
    build_tree(flat)
    roots = build_tree(flat)
    assert names(roots[0].children) == ["Leaf"]
