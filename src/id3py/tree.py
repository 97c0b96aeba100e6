# -*- coding: utf-8 -*-
"""
id3py.tree
==========

This module implements ID3-style induction of a binary-label decision tree
over categorical features.  Each internal node splits on one feature and owns
one child per feature value of the dataset (full-width categorical splits,
including branches that receive no training records).  The feature with the
highest information gain is chosen at every node; growth stops when a node is
uniformly labelled or when no feature has any separating power.

Besides induction the module provides the tree walk used for classification,
the accuracy evaluator, and text rendering / rule export of fitted trees.

The :class:`TreeNode` class holds the per-node state.  Nodes keep a weak
reference to their parent, which is used only to resolve majority-label ties
upward; ownership always flows from the root down.
"""

from __future__ import annotations
import logging
import weakref
from typing import Iterable, Iterator, Sequence

import numpy as np
from sklearn.utils import check_random_state

from .data import Dataset, Datum

logger = logging.getLogger(__name__)

# Gains within this distance of each other (or of zero) are treated as equal.
_GAIN_TOL = 1e-12


class TreeStructureError(RuntimeError):
    """Raised when a record cannot be routed through a tree."""


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def binary_entropy(p: float) -> float:
    """Shannon entropy (bits) of a two-outcome distribution ``(p, 1 - p)``."""
    q = np.array([p, 1.0 - p], dtype=float)
    q = q[q > 0]
    return float(-np.sum(q * np.log2(q)))


def entropy(records: Sequence[Datum], labels: Sequence[str]) -> float:
    """Binary entropy of the label distribution of ``records``.

    The fraction of records carrying ``labels[0]`` is plugged into
    :func:`binary_entropy`.  An empty sequence has zero entropy.
    """
    if not records:
        return 0.0
    n_first = sum(1 for d in records if d.label == labels[0])
    return binary_entropy(n_first / len(records))


def split_records(records: Iterable[Datum], feature_index: int,
                  feature_values: Sequence[str]) -> list[list[Datum]]:
    """Partition ``records`` into one bucket per entry of ``feature_values``.

    Buckets are returned in ``feature_values`` order; values that no record
    carries produce empty buckets.
    """
    buckets: dict[str, list[Datum]] = {v: [] for v in feature_values}
    for d in records:
        try:
            buckets[d.feature(feature_index)].append(d)
        except KeyError:
            raise TreeStructureError(
                f"Datum {d.identifier!r} has feature value {d.feature(feature_index)!r} "
                f"at index {feature_index}, outside the dataset's values {tuple(feature_values)}"
            ) from None
    return [buckets[v] for v in feature_values]


def information_gain(parent_entropy: float, buckets: Sequence[Sequence[Datum]],
                     labels: Sequence[str]) -> float:
    """Entropy reduction achieved by partitioning a subset into ``buckets``.

    Parameters
    ----------
    parent_entropy : float
        Entropy of the unsplit subset.
    buckets : sequence of sequences of Datum
        The partition.  Empty buckets contribute nothing.
    labels : sequence of str
        The dataset's two labels.

    Returns
    -------
    float
        ``parent_entropy - sum(|b| / n * H(b))``.
    """
    sizes = np.array([len(b) for b in buckets], dtype=float)
    total = sizes.sum()
    if total <= 0:
        return 0.0
    child_h = np.array([entropy(b, labels) for b in buckets], dtype=float)
    return float(parent_entropy - np.dot(sizes / total, child_h))


def _feature_name(i: int, fn=None) -> str:
    return fn[i] if (fn is not None and 0 <= i < len(fn)) else f"X[{i}]"


def _class_name(label: str, labels: Sequence[str], cn=None) -> str:
    return label if cn is None else str(cn[labels.index(label)])


# -----------------------------------------------------------------------------
# Node
# -----------------------------------------------------------------------------
class TreeNode:
    """A node of an induced tree.

    Parameters
    ----------
    data : list[Datum]
        Records that reached this node.  Held by reference.
    labels : tuple[str, str]
        The dataset's two labels.
    rng : numpy.random.RandomState
        Random source used only to break ties that cannot be resolved by any
        ancestor.
    feature_value : str or None, default=None
        Value of the parent's split feature that routes records here;
        ``None`` for the root.
    parent : TreeNode or None, default=None
        The parent node.  Stored as a weak reference.

    Attributes
    ----------
    entropy : float
        Binary entropy of ``data``.
    split_feature : int or None
        Index of the feature this node splits on; ``None`` unless internal.
    children : list[TreeNode]
        One child per dataset feature value, in dataset order.
    majority : str or None
        Strictly more frequent label in ``data``; ``None`` on a tie.
    uniform_val : str or None
        Label predicted by this node when it is a leaf, ``None`` otherwise.
    pruned : bool
        True once reduced-error pruning collapsed this node permanently.
    """

    def __init__(self, data: list[Datum], *, labels: Sequence[str], rng,
                 feature_value: str | None = None, parent: TreeNode | None = None):
        self.data = data
        self.labels = tuple(labels)
        self.feature_value = feature_value
        self.split_feature: int | None = None
        self.children: list[TreeNode] = []
        self.pruned = False
        self._rng = rng
        self._parent = weakref.ref(parent) if parent is not None else None

        n_first = sum(1 for d in data if d.label == self.labels[0])
        self.counts = (n_first, len(data) - n_first)
        self.entropy = binary_entropy(n_first / len(data)) if data else 0.0
        if self.counts[0] > self.counts[1]:
            self.majority = self.labels[0]
        elif self.counts[1] > self.counts[0]:
            self.majority = self.labels[1]
        else:
            self.majority = None
        self.uniform_val = self._check_uniformity()

    @property
    def parent(self) -> TreeNode | None:
        return self._parent() if self._parent is not None else None

    @property
    def is_leaf(self) -> bool:
        return self.uniform_val is not None

    @property
    def state(self) -> str:
        """``"leaf"``, ``"internal"`` or ``"unresolved"`` (no split decided yet)."""
        if self.is_leaf:
            return "leaf"
        return "internal" if self.children else "unresolved"

    def _random_label(self) -> str:
        return self.labels[int(self._rng.randint(2))]

    def _check_uniformity(self) -> str | None:
        n_first, n_second = self.counts
        if n_first and n_second:
            return None
        if n_first:
            return self.labels[0]
        if n_second:
            return self.labels[1]
        # Empty bucket: inherit the parent's decision.
        parent = self.parent
        return parent.majority_label() if parent is not None else self._random_label()

    def majority_label(self) -> str:
        """Majority label here, else the nearest ancestor's, else random."""
        node = self
        while node.majority is None:
            parent = node.parent
            if parent is None:
                return node._random_label()
            node = parent
        return node.majority

    def add_child(self, data: list[Datum], feature_value: str) -> TreeNode:
        child = TreeNode(data, labels=self.labels, rng=self._rng,
                         feature_value=feature_value, parent=self)
        self.children.append(child)
        return child

    def collapse(self, label: str | None = None) -> str | None:
        """Force this node into a leaf predicting ``label``.

        ``label`` defaults to :meth:`majority_label`.  Children are kept, so
        the previous state can be reinstated with :meth:`restore`.

        Returns
        -------
        str or None
            The previous ``uniform_val``.
        """
        previous = self.uniform_val
        self.uniform_val = self.majority_label() if label is None else label
        return previous

    def restore(self, uniform_val: str | None) -> None:
        self.uniform_val = uniform_val

    def iter_nodes(self, reachable: bool = False) -> Iterator[TreeNode]:
        """Pre-order walk of the subtree.

        With ``reachable=True`` the walk does not descend below leaves, so
        children kept under collapsed nodes are skipped.
        """
        yield self
        if reachable and self.is_leaf:
            return
        for child in self.children:
            yield from child.iter_nodes(reachable)

    def __repr__(self) -> str:
        if self.is_leaf:
            return (f"TreeNode(leaf={self.uniform_val!r}, value={self.feature_value!r}, "
                    f"n={len(self.data)}, pruned={self.pruned})")
        return (f"TreeNode(split=X[{self.split_feature}], value={self.feature_value!r}, "
                f"n={len(self.data)}, entropy={self.entropy:.4f})")


# -----------------------------------------------------------------------------
# Tree
# -----------------------------------------------------------------------------
class DecisionTree:
    """A fitted tree: the root node plus the dataset-wide split alphabet."""

    def __init__(self, root: TreeNode, *, feature_values: Sequence[str],
                 n_features: int):
        self.root = root
        self.feature_values = tuple(feature_values)
        self.n_features = int(n_features)

    @property
    def labels(self) -> tuple[str, ...]:
        return self.root.labels

    def iter_nodes(self, reachable: bool = True) -> Iterator[TreeNode]:
        return self.root.iter_nodes(reachable)

    @property
    def n_nodes(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    @property
    def n_leaves(self) -> int:
        return sum(1 for n in self.iter_nodes() if n.is_leaf)

    @property
    def depth(self) -> int:
        def _depth(node: TreeNode) -> int:
            if node.is_leaf:
                return 0
            return 1 + max((_depth(c) for c in node.children), default=-1)
        return _depth(self.root)

    def classify(self, features: Sequence[str]) -> str:
        """Follow the branches matching ``features`` down to a leaf label."""
        node = self.root
        while not node.is_leaf:
            value = features[node.split_feature]
            for child in node.children:
                if child.feature_value == value:
                    node = child
                    break
            else:
                raise TreeStructureError(
                    f"No branch for value {value!r} of feature {node.split_feature}")
        return node.uniform_val

    def render(self, feature_names=None, class_names=None) -> str:
        return render_tree(self, feature_names, class_names)

    def export_rules(self, feature_names=None, class_names=None) -> list[str]:
        """One ``<antecedent> => <label>`` string per reachable leaf.

        ``class_names``, if given, holds one display name per entry of
        :attr:`labels`, in the same order.
        """
        rules: list[str] = []
        self._collect_rules(self.root, [], rules, feature_names, class_names)
        return rules

    def _collect_rules(self, node: TreeNode, parts, rules, fn, cn):
        if node.is_leaf:
            body = " AND ".join(parts) if parts else "<root>"
            rules.append(f"{body} => {_class_name(node.uniform_val, self.labels, cn)}")
            return
        name = _feature_name(node.split_feature, fn)
        for child in node.children:
            self._collect_rules(child, parts + [f"{name} = {child.feature_value}"], rules, fn, cn)

    def __str__(self) -> str:
        return render_tree(self)


def render_tree(tree: DecisionTree, feature_names=None, class_names=None) -> str:
    """Render ``tree`` depth-first, one node per line.

    Each line reads ``<incoming value> <split feature or label> (<n> records)``
    and children are indented two spaces deeper than their parent.  The root
    has no incoming value and shows a blank in its place.

    The output is the tree as it classifies: a collapsed node is shown as a
    leaf and the children it still holds (kept so that :meth:`TreeNode.restore`
    can undo the collapse) are not printed.  Use ``node.iter_nodes()`` to
    inspect them.

    ``class_names`` maps leaf labels to display names, as in
    :meth:`DecisionTree.export_rules`.
    """
    lines: list[str] = []
    _render_node(tree.root, 0, feature_names, class_names, lines)
    return "\n".join(lines)


def _render_node(node: TreeNode, depth: int, fn, cn, lines: list[str]):
    incoming = " " if node.feature_value is None else node.feature_value
    if node.is_leaf:
        body = _class_name(node.uniform_val, node.labels, cn)
    else:
        body = _feature_name(node.split_feature, fn)
    lines.append(f"{'  ' * depth}{incoming} {body} ({len(node.data)} records)")
    if node.is_leaf:
        return
    for child in node.children:
        _render_node(child, depth + 1, fn, cn, lines)


# -----------------------------------------------------------------------------
# Induction
# -----------------------------------------------------------------------------
def induce(dataset: Dataset, random_state=None) -> DecisionTree:
    """
    Grow a tree on every record of ``dataset``.

    Parameters
    ----------
    dataset : Dataset
        Training records.  Its ``feature_values`` define the branches of
        every split, so pass a :meth:`Dataset.subset` of the full universe
        rather than a freshly built dataset when training on a split.
    random_state : int, RandomState or None, default=None
        Source for tie-breaking between the two labels.

    Returns
    -------
    DecisionTree
        The unpruned tree.
    """
    rng = check_random_state(random_state)
    root = TreeNode(list(dataset.records), labels=dataset.labels, rng=rng)
    _grow(root, dataset.feature_values, dataset.n_features)
    tree = DecisionTree(root, feature_values=dataset.feature_values,
                        n_features=dataset.n_features)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Induced tree on %d records: %d nodes, %d leaves, depth %d",
                     len(dataset), tree.n_nodes, tree.n_leaves, tree.depth)
    return tree


def _grow(node: TreeNode, feature_values: Sequence[str], n_features: int):
    if node.is_leaf:
        return

    best_gain, best_feature, best_split = -1.0, None, None
    for i in range(n_features):
        buckets = split_records(node.data, i, feature_values)
        gain = information_gain(node.entropy, buckets, node.labels)
        logger.debug("X[%d] gain=%.4f", i, gain)
        if gain > best_gain + _GAIN_TOL:
            best_gain, best_feature, best_split = gain, i, buckets

    # No feature separates the labels: stop here instead of splitting forever
    # on the first feature.
    if best_gain <= _GAIN_TOL:
        node.collapse()
        logger.debug("Zero-gain leaf over %d records -> %s", len(node.data), node.uniform_val)
        return

    logger.debug("Split %d records on X[%d] (gain=%.4f)", len(node.data), best_feature, best_gain)
    node.split_feature = best_feature
    for value, bucket in zip(feature_values, best_split):
        node.add_child(bucket, value)
    for child in node.children:
        _grow(child, feature_values, n_features)


# -----------------------------------------------------------------------------
# Evaluation
# -----------------------------------------------------------------------------
def evaluate(tree: DecisionTree, records: Iterable[Datum]) -> float:
    """Percentage (0-100) of ``records`` whose label ``tree`` predicts."""
    records = list(records)
    if not records:
        raise ValueError("Cannot evaluate a tree on an empty set of records")
    matches = sum(1 for d in records if tree.classify(d.features) == d.label)
    return 100.0 * matches / len(records)
