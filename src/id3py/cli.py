# -*- coding: utf-8 -*-
"""
id3py.cli
=========

Command-line entry point: read a tab-delimited record file, train and tune a
tree on all of it, print the tree, then report the leave-one-out
cross-validated accuracy.

    $ id3py voting-data.tsv --seed 0
"""

from __future__ import annotations
import argparse
import logging
import sys

from .data import DatasetError
from .io import read_tsv
from .validation import TUNE_SPACING, cross_validate, train_and_tune

logger = logging.getLogger("id3py")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="id3py",
        description="ID3 decision tree with reduced-error pruning and leave-one-out cross-validation.")
    ap.add_argument("path", help="tab-delimited file: <identifier>\\t<label>\\t<features> per line")
    ap.add_argument("--tune-spacing", type=int, default=TUNE_SPACING,
                    help="every N-th record is held out for pruning (default: %(default)s)")
    ap.add_argument("--seed", type=int, default=None, help="seed for label tie-breaking")
    ap.add_argument("--no-prune", action="store_true", help="skip reduced-error pruning")
    ap.add_argument("--no-cross-validate", action="store_true",
                    help="only train, tune and print the tree")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(name)s : %(message)s")

    try:
        dataset = read_tsv(args.path)
    except (OSError, DatasetError) as exc:
        logger.error("%s", exc)
        return 1

    pruning = not args.no_prune
    logger.info("Training and tuning on entire data set")
    tree = train_and_tune(dataset, spacing=args.tune_spacing, random_state=args.seed,
                          pruning=pruning)
    print(tree)

    if not args.no_cross_validate:
        accuracy = cross_validate(dataset, spacing=args.tune_spacing,
                                  random_state=args.seed, pruning=pruning)
        print(f"Tree accuracy {accuracy:.3f}%")
    return 0


if __name__ == "__main__":
    sys.exit(main())
