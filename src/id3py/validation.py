# -*- coding: utf-8 -*-
"""
id3py.validation
================

Train/tune splitting and leave-one-out cross-validation of the full
induce-then-prune pipeline.
"""

from __future__ import annotations
import logging

import numpy as np
from sklearn.model_selection import LeaveOneOut
from sklearn.utils import check_random_state

from .data import Dataset
from .pruning import prune
from .tree import DecisionTree, evaluate, induce

logger = logging.getLogger(__name__)

# Every TUNE_SPACING-th record (starting with the first) goes to the tuning set.
TUNE_SPACING = 4


def train_tune_split(dataset: Dataset, spacing: int = TUNE_SPACING) -> tuple[Dataset, Dataset]:
    """Split ``dataset`` into ``(training, tuning)`` subsets.

    Records at positions ``0, spacing, 2 * spacing, ...`` form the tuning
    set, the remaining records the training set.  Order is preserved.
    """
    spacing = int(spacing)
    if spacing < 1:
        raise ValueError(f"spacing must be a positive integer, got {spacing}")
    positions = np.arange(len(dataset))
    tune_mask = positions % spacing == 0
    return dataset.subset(positions[~tune_mask]), dataset.subset(positions[tune_mask])


def train_and_tune(dataset: Dataset, spacing: int = TUNE_SPACING, random_state=None,
                   pruning: bool = True) -> DecisionTree:
    """
    Induce a tree on the training part of ``dataset`` and prune it on the
    tuning part.

    Parameters
    ----------
    dataset : Dataset
        Records to learn from.
    spacing : int, default=4
        Tuning-set spacing, see :func:`train_tune_split`.
    random_state : int, RandomState or None, default=None
        Source for label tie-breaking.
    pruning : bool, default=True
        If ``False`` the whole dataset is used for induction and no tuning
        set is held out.

    Returns
    -------
    DecisionTree
    """
    rng = check_random_state(random_state)
    if not pruning:
        return induce(dataset, random_state=rng)
    training, tuning = train_tune_split(dataset, spacing)
    tree = induce(training, random_state=rng)
    if len(tuning):
        prune(tree, tuning)
    return tree


def cross_validate(dataset: Dataset, spacing: int = TUNE_SPACING, random_state=None,
                   pruning: bool = True) -> float:
    """
    Leave-one-out accuracy of :func:`train_and_tune` on ``dataset``.

    Every record is held out once; a fresh tree is trained and tuned on the
    remaining records and scored on the held-out one.  The result is the
    mean of those single-record accuracies, in percent.

    Raises
    ------
    ValueError
        If ``dataset`` has fewer than two records.
    """
    n = len(dataset)
    if n < 2:
        raise ValueError(f"Leave-one-out cross-validation needs at least 2 records, got {n}")
    rng = check_random_state(random_state)

    logger.info("Leave-one-out cross-validation over %d records", n)
    scores = np.empty(n, dtype=float)
    for fold, (rest, held_out) in enumerate(LeaveOneOut().split(np.zeros((n, 1)))):
        tree = train_and_tune(dataset.subset(rest), spacing, random_state=rng, pruning=pruning)
        scores[fold] = evaluate(tree, dataset.subset(held_out))
        logger.debug("Fold %d (%s): %s", fold, dataset[int(held_out[0])].identifier,
                     "hit" if scores[fold] else "miss")

    accuracy = float(scores.mean())
    logger.info("Cross-validated accuracy %.3f%%", accuracy)
    return accuracy
