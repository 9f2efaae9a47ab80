"""
Layer tree reconstruction.

Document readers hand over layers as a flat, back-to-front list in which
groups are delimited by marker records: a start marker has its
"pixel data irrelevant" flag set, and an end marker is recognized by its
name. :py:func:`build_tree` turns this list into nested records.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence

from psd_layout.api.layers import LayerRecord
from psd_layout.constants import END_GROUP_MARKERS, END_GROUP_PLACEHOLDER

logger = logging.getLogger(__name__)


class RecordKind(Enum):
    START_GROUP = "start"
    END_GROUP = "end"
    CONTENT = "content"
    EMPTY = "empty"


def is_end_group(record: LayerRecord) -> bool:
    """
    Return True if the record closes a group.

    Besides the divider names, a zero-height record named exactly ``" copy"``
    closes a group; one exporter writes its end markers that way.
    """
    name = record.name or ""
    if any(marker in name for marker in END_GROUP_MARKERS):
        return True
    return name == END_GROUP_PLACEHOLDER and record.rect.height == 0


def classify(record: LayerRecord) -> RecordKind:
    """Classify a record of the flat layer stream."""
    if is_end_group(record):
        return RecordKind.END_GROUP
    if record.pixel_data_irrelevant:
        return RecordKind.START_GROUP
    if record.rect.is_degenerate():
        return RecordKind.EMPTY
    return RecordKind.CONTENT


def build_tree(layers: Optional[Sequence[LayerRecord]]) -> List[LayerRecord]:
    """
    Build the layer tree from a flat list of records.

    The list is read in reverse, so that group start markers come before
    their children. The caller's list is left untouched, but records get
    their `children` reassigned.

    Zero-area records that are not group markers are dropped. When markers
    are unbalanced and nothing was emitted, the group in progress is
    returned as the single root.

    :param layers: flat records in back-to-front order, or `None`.
    :return: list of root records in document order.
    """
    if layers is None:
        logger.debug("No layers given, empty tree")
        return []

    roots: List[LayerRecord] = []
    stack: List[LayerRecord] = []
    current: Optional[LayerRecord] = None

    for record in reversed(list(layers)):
        kind = classify(record)
        if kind == RecordKind.END_GROUP:
            if stack:
                parent = stack.pop()
                if current is not None:
                    parent.children.append(current)
                current = parent
            else:
                if current is not None:
                    roots.append(current)
                else:
                    logger.warning(
                        "Unbalanced group end marker %r, ignored", record.name
                    )
                current = None
        elif kind == RecordKind.START_GROUP:
            if current is not None:
                stack.append(current)
            record.children = []
            current = record
        elif kind == RecordKind.CONTENT:
            if current is not None:
                current.children.append(record)
            else:
                roots.append(record)
        else:
            logger.debug("Dropping zero-area layer %r", record.name)

    if current is not None or stack:
        logger.warning(
            "Unbalanced group markers, %d group(s) left open",
            len(stack) + (1 if current is not None else 0),
        )
        if not roots and current is not None and current.children:
            roots.append(current)

    return roots
