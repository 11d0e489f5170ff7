#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Command-line runner for the tweet sentiment classifier.

- Trains the lexicon on <training_file>
- Writes "<label>,<id>" predictions for <test_file> to <results_file>
- Scores them against <test_sentiment_file> into <accuracy_file>
- Optional: cross-validation / holdout on the training data, report plots

Example:
    python run_sentiment.py data/train.csv data/test.csv data/test_sentiment.csv results.csv accuracy.txt
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from tweet_sentiment.config import (
    DEFAULT_SEED,
    DEFAULT_TOP_WORDS,
    MIN_TOKEN_LENGTH,
    TEXT_ENCODING,
    TEXT_ERRORS,
)
from tweet_sentiment.core.cross_validation import cross_validate, holdout_evaluate, nested_cv
from tweet_sentiment.core.metrics import classification_report
from tweet_sentiment.experiments.classifier_pipeline import ClassifierPipeline
from tweet_sentiment.models.models_registry import get_factory_and_grid


def _open(path: Path, mode: str, what: str):
    try:
        return open(path, mode, encoding=TEXT_ENCODING, errors=TEXT_ERRORS)
    except OSError as e:
        print(f"Error opening {what} file: {path} ({e.strerror})", file=sys.stderr)
        return None


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Lexicon sentiment classifier for tweets")
    ap.add_argument("training_file", type=Path, help="CSV file with labeled training data")
    ap.add_argument("test_file", type=Path, help="CSV file with unlabeled test data")
    ap.add_argument("test_sentiment_file", type=Path, help="CSV file with actual sentiments for test data")
    ap.add_argument("results_file", type=Path, help="Output file for prediction results")
    ap.add_argument("accuracy_file", type=Path, help="Output file for accuracy metrics")

    # Optional extras
    ap.add_argument("--min-token-length", type=int, default=MIN_TOKEN_LENGTH,
                    help="Shortest token the lexicon counts (default: 2)")
    ap.add_argument("--cv-folds", type=int, default=None,
                    help="Run stratified k-fold CV on the training data")
    ap.add_argument("--tune", action="store_true",
                    help="With --cv-folds, select min-token-length by nested CV")
    ap.add_argument("--holdout", type=float, default=None,
                    help="Also report a stratified holdout split of this test fraction")
    ap.add_argument("--report-dir", type=Path, default=None,
                    help="Write plots and summary tables here")
    ap.add_argument("--top-words", type=int, default=DEFAULT_TOP_WORDS)
    ap.add_argument("--seed", type=int, default=DEFAULT_SEED)
    return ap


def _run_experiments(pipeline: ClassifierPipeline, args: argparse.Namespace) -> Optional[dict]:
    texts = [t for t, _ in pipeline.training_records]
    labels = [y for _, y in pipeline.training_records]
    params = {"min_token_length": args.min_token_length}
    cv_res = None

    if args.cv_folds:
        print("=" * 60)
        print(f"Cross-validation on training data ({args.cv_folds} folds)")
        print("=" * 60)
        if args.tune:
            factory, grid = get_factory_and_grid("lexicon", fast=False)
            cv_res = nested_cv(texts, labels, args.cv_folds, 2, factory, grid, seed=args.seed)
            print(f"[cv] Mean F1: {cv_res['mean_f1']:.4f} ± {cv_res['std_f1']:.4f}")
        else:
            factory, _ = get_factory_and_grid("lexicon")
            cv_res = cross_validate(texts, labels, args.cv_folds, factory, params, seed=args.seed)
            print(f"[cv] Mean accuracy: {cv_res['mean_accuracy']:.4f} ± {cv_res['std_accuracy']:.4f}")

    if args.holdout:
        factory, _ = get_factory_and_grid("lexicon")
        holdout_evaluate(texts, labels, factory, params, test_size=args.holdout, random_state=args.seed)

    return cv_res


def _write_report(pipeline: ClassifierPipeline, args: argparse.Namespace, cv_res: Optional[dict]) -> None:
    from tweet_sentiment.experiments.visualization import (
        export_summary_table,
        plot_confusion_matrix,
        plot_top_words,
    )

    out = args.report_dir
    out.mkdir(parents=True, exist_ok=True)
    result = pipeline.last_evaluation
    if result.total:
        print(classification_report(result.y_true, result.y_pred, digits=3))
        plot_confusion_matrix(result.metrics["confusion_matrix"], out / "confusion_matrix.png")
    plot_top_words(pipeline.lexicon, out / "top_words.png", n=args.top_words)
    export_summary_table(result, out, cv_res)
    if cv_res is not None:
        with open(out / "cv_results.json", "w", encoding="utf-8") as f:
            json.dump(cv_res, f, ensure_ascii=False, indent=2, default=str)
    print(f"Report written to: {out}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    print("Sentiment Analysis Configuration:")
    print(f"  Training File:       {args.training_file}")
    print(f"  Test File:           {args.test_file}")
    print(f"  Test Sentiment File: {args.test_sentiment_file}")
    print(f"  Results File:        {args.results_file}")
    print(f"  Accuracy File:       {args.accuracy_file}")
    print()

    keep = bool(args.cv_folds or args.holdout)
    pipeline = ClassifierPipeline(min_token_length=args.min_token_length, keep_records=keep)

    # STEP 1: train
    print("Training classifier...")
    f = _open(args.training_file, "r", "training")
    if f is None:
        print("Error: Failed to train the classifier.", file=sys.stderr)
        return 1
    with f:
        ok = pipeline.train(f)
    if not ok:
        print("Error: Failed to train the classifier.", file=sys.stderr)
        return 1

    # STEP 2: predict
    print("Making predictions...")
    test_in = _open(args.test_file, "r", "test")
    results_out = _open(args.results_file, "w", "predictions output") if test_in else None
    if results_out is None:
        if test_in is not None:
            test_in.close()
        print("Error: Failed to make predictions.", file=sys.stderr)
        return 1
    with test_in, results_out:
        ok = pipeline.predict(test_in, results_out)
    if not ok:
        print("Error: Failed to make predictions.", file=sys.stderr)
        return 1

    # STEP 3: evaluate
    print("Evaluating predictions...")
    truth_in = _open(args.test_sentiment_file, "r", "ground truth")
    acc_out = _open(args.accuracy_file, "w", "accuracy output") if truth_in else None
    if acc_out is None:
        if truth_in is not None:
            truth_in.close()
        print("Error: Failed to evaluate predictions.", file=sys.stderr)
        return 1
    with truth_in, acc_out:
        ok = pipeline.evaluate(truth_in, acc_out)
    if not ok:
        print("Error: Failed to evaluate predictions.", file=sys.stderr)
        return 1

    cv_res = None
    if keep:
        try:
            cv_res = _run_experiments(pipeline, args)
        except ValueError as e:
            print(f"Error: Failed to evaluate on training data: {e}", file=sys.stderr)
            return 1
    if args.report_dir is not None:
        _write_report(pipeline, args, cv_res)

    print("Sentiment analysis complete.")
    print(f"Results written to: {args.results_file}")
    print(f"Accuracy metrics written to: {args.accuracy_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
