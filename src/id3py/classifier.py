# -*- coding: utf-8 -*-
"""
id3py.classifier
================

A scikit-learn style wrapper around the induce / prune pipeline.

:class:`ID3Classifier` accepts rows of single-character categorical values
(either as strings such as ``"+-.+"`` or as sequences such as
``['+', '-', '.', '+']``) and exactly two class labels.  ``fit`` holds out
every ``tune_spacing``-th row as a tuning set, grows an ID3 tree on the rest
and applies reduced-error pruning.  The fitted tree can be printed, exported
as rules or rendered with Graphviz.
"""

from __future__ import annotations
import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.utils import check_random_state

from .data import DatasetBuilder
from .tree import DecisionTree, TreeNode, _feature_name, render_tree
from .validation import TUNE_SPACING, train_and_tune


def _as_feature_strings(X) -> list[str]:
    rows = []
    for i, row in enumerate(X):
        if isinstance(row, str):
            rows.append(row)
            continue
        cells = [str(v) for v in row]
        if any(len(c) != 1 for c in cells):
            raise ValueError(f"Row {i}: every feature value must be a single character, got {cells}")
        rows.append("".join(cells))
    return rows


class ID3Classifier(ClassifierMixin, BaseEstimator):
    """
    ID3 decision tree with reduced-error pruning for binary labels.

    Parameters
    ----------
    pruning : bool, default=True
        Whether to hold out a tuning set and apply reduced-error pruning.
        If ``False`` the tree is grown on every training row.
    tune_spacing : int, default=4
        Rows ``0, tune_spacing, 2 * tune_spacing, ...`` of the training data
        form the tuning set.
    random_state : int, RandomState or None, default=None
        Seed for breaking label ties at nodes that no ancestor can resolve.
    feature_names : list[str] or None, default=None
        Optional names used when printing or exporting the tree.

    Attributes
    ----------
    tree_ : DecisionTree
        The fitted tree.
    classes_ : ndarray of shape (2,)
        The two class labels, sorted.
    n_features_ : int
        Number of features seen during ``fit``.
    """

    def __init__(
        self,
        *,
        pruning: bool = True,
        tune_spacing: int = TUNE_SPACING,
        random_state=None,
        feature_names: list[str] | None = None,
    ):
        self.pruning = pruning
        self.tune_spacing = tune_spacing
        self.random_state = random_state
        self.feature_names = feature_names

    def fit(self, X, y):
        rows = _as_feature_strings(X)
        y = np.asarray(y)
        if len(rows) != len(y):
            raise ValueError(f"X has {len(rows)} rows but y has {len(y)} labels")
        # The tree works on the codes "0" / "1"; classes_ keeps the caller's labels.
        classes, codes = np.unique(y, return_inverse=True)
        if len(classes) != 2:
            raise ValueError(f"ID3Classifier needs exactly 2 classes, got {list(classes)}")
        builder = DatasetBuilder()
        for i, (features, code) in enumerate(zip(rows, codes)):
            builder.add_datum(str(i), str(code), features)
        dataset = builder.build()

        self.tree_ = train_and_tune(dataset, spacing=self.tune_spacing,
                                    random_state=check_random_state(self.random_state),
                                    pruning=self.pruning)
        self.classes_ = classes
        self.n_features_ = dataset.n_features
        return self

    def _check_fitted(self) -> DecisionTree:
        if getattr(self, "tree_", None) is None:
            raise ValueError("Estimator not fitted. Call fit(...) first.")
        return self.tree_

    def predict(self, X):
        """
        Predict class labels for the provided rows.

        Parameters
        ----------
        X : iterable of str or of sequences of single characters
            Rows with ``n_features_`` values each.

        Returns
        -------
        ndarray of shape (n_samples,)
            Predicted labels.

        Raises
        ------
        ValueError
            If the estimator has not been fitted or a row has the wrong
            number of features.
        id3py.tree.TreeStructureError
            If a row carries a feature value never seen during ``fit``.
        """
        tree = self._check_fitted()
        rows = _as_feature_strings(X)
        for i, row in enumerate(rows):
            if len(row) != self.n_features_:
                raise ValueError(f"Row {i} has {len(row)} features, expected {self.n_features_}")
        codes = np.array([int(tree.classify(row)) for row in rows], dtype=int)
        return self.classes_[codes]

    def export_rules(self, *, feature_names=None) -> list[str]:
        """Decision rules of the fitted tree, one ``<antecedent> => <label>`` per leaf."""
        tree = self._check_fitted()
        return tree.export_rules(feature_names or self.feature_names, self.classes_)

    def print_tree(self, feature_names=None):
        """Print the fitted tree to ``stdout``, one node per line."""
        tree = self._check_fitted()
        print(render_tree(tree, feature_names or self.feature_names, self.classes_))

    def export_graphviz(self, filename: str | None = None, *, feature_names=None,
                        format: str = "png") -> str:
        """
        Export the fitted tree in Graphviz format.

        Parameters
        ----------
        filename : str or None, default=None
            Basename of the output file; the extension follows ``format``.
            If ``None`` the DOT source is returned and nothing is written.
        feature_names : list[str], optional
            Names for the features.
        format : str, default="png"
            Graphviz output format.  ``'dot'`` writes the DOT source without
            invoking the external ``dot`` binary.

        Returns
        -------
        str
            Path to the written file, or the DOT source if ``filename`` is
            None.
        """
        tree = self._check_fitted()
        try:
            import graphviz
        except ImportError:
            raise RuntimeError("Graphviz is required for export_graphviz but not installed.")
        dot = graphviz.Digraph(format=format)
        self._add_graph_nodes(dot, tree.root, "0", feature_names or self.feature_names)

        if filename is None:
            return dot.source
        if format.lower() == "dot":
            path = f"{filename}.dot"
            dot.save(path)
            return path
        return dot.render(filename, cleanup=True)

    def _add_graph_nodes(self, dot, node: TreeNode, name: str, fn):
        if node.is_leaf:
            dot.node(name, f"{self.classes_[int(node.uniform_val)]}\n{len(node.data)} records",
                     shape="box", style="filled", color="lightgrey")
            return
        dot.node(name, _feature_name(node.split_feature, fn),
                 shape="ellipse", style="filled", color="lightblue")
        for i, child in enumerate(node.children):
            child_id = f"{name}_{i}"
            self._add_graph_nodes(dot, child, child_id, fn)
            dot.edge(name, child_id, label=child.feature_value)
