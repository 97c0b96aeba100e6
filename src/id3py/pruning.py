# -*- coding: utf-8 -*-
"""
id3py.pruning
=============

Reduced-error pruning of an induced tree against a held-out tuning set.

The search is greedy: every pass tries collapsing each internal node of the
current tree into a leaf labelled with its majority label, measures the
whole-tree accuracy on the tuning records, and undoes the change.  The single
collapse with the best accuracy is made permanent if it strictly improves on
the current accuracy, and the search starts over on the smaller tree.
"""

from __future__ import annotations
import logging
from typing import Iterable

from .data import Datum
from .tree import DecisionTree, TreeNode, evaluate

logger = logging.getLogger(__name__)


def prune(tree: DecisionTree, tuning: Iterable[Datum]) -> DecisionTree:
    """
    Prune ``tree`` in place until no collapse improves tuning accuracy.

    Parameters
    ----------
    tree : DecisionTree
        Tree returned by :func:`id3py.tree.induce`.
    tuning : iterable of Datum
        Held-out records; must be non-empty.

    Returns
    -------
    DecisionTree
        The same tree object, with the chosen nodes collapsed and flagged
        ``pruned``.
    """
    tuning = list(tuning)
    accuracy = evaluate(tree, tuning)
    logger.debug("Unpruned tuning accuracy %.3f%% on %d records", accuracy, len(tuning))

    while True:
        node, label, candidate = _search_best_prune(tree, tree.root, tuning)
        if node is None or candidate <= accuracy:
            break
        node.collapse(label)
        node.pruned = True
        logger.info("Pruned %r -> %s: tuning accuracy %.3f%% -> %.3f%%",
                    node, label, accuracy, candidate)
        accuracy = candidate
    return tree


def _search_best_prune(tree: DecisionTree, node: TreeNode, tuning: list[Datum]):
    """Best single collapse within the subtree rooted at ``node``.

    Nodes are tried in pre-order and a later node only replaces the current
    best with a strictly higher accuracy.  Leaves are not candidates.

    Returns
    -------
    tuple
        ``(node, label, accuracy)``, or ``(None, None, -1.0)`` when the
        subtree holds no internal node.
    """
    if node.is_leaf:
        return None, None, -1.0

    label = node.majority_label()
    previous = node.collapse(label)
    best = (node, label, evaluate(tree, tuning))
    node.restore(previous)

    for child in node.children:
        result = _search_best_prune(tree, child, tuning)
        if result[2] > best[2]:
            best = result
    return best
