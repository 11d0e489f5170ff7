#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Classifier Pipeline for Tweet Sentiment

Orchestrates the three phases of the lexicon classifier over already
decoded line sequences:
1. train    - CSV rows (sentiment,id,date,query,user,text) build the lexicon
2. predict  - CSV rows (id,date,query,user,text) are scored; "<label>,<id>"
              lines go to the sink in input order
3. evaluate - ground-truth rows (sentiment,id,...) are matched against the
              recorded predictions; accuracy and misclassifications go to
              the sink

The first line of every input is a header and is always skipped. Rows with
too few fields and ground-truth ids that were never predicted are skipped
silently. Each phase returns False only when its input or sink cannot be
read or written at all.
"""

import sys
from enum import Enum
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, TextIO, Tuple

from ..config import (
    ACCURACY_DIGITS,
    MIN_TOKEN_LENGTH,
    NEGATIVE,
    POSITIVE,
    TEST_COLUMNS,
    TEST_ID_COL,
    TEST_TEXT_COL,
    TRAIN_COLUMNS,
    TRAIN_LABEL_COL,
    TRAIN_TEXT_COL,
    TRUTH_COLUMNS,
    TRUTH_ID_COL,
    TRUTH_LABEL_COL,
)
from ..core.csv_line import is_positive_label, parse_csv_line
from ..core.metrics import confusion_matrix, f1_score, precision_score, recall_score
from ..core.text_value import TextValue
from ..core.tokenizer import tokenize
from ..models.lexicon import LexiconModel


class PipelineState(Enum):
    UNTRAINED = "untrained"
    TRAINED = "trained"
    PREDICTED = "predicted"
    EVALUATED = "evaluated"


class Misclassification(NamedTuple):
    predicted: int
    actual: int
    tweet_id: TextValue

    def render(self) -> str:
        return f"{self.predicted},{self.actual},{self.tweet_id}"


class EvaluationResult(NamedTuple):
    accuracy: float
    correct: int
    total: int
    misclassifications: List[Misclassification]
    y_true: List[int]
    y_pred: List[int]
    metrics: Dict[str, object]

    def accuracy_line(self) -> str:
        return f"{self.accuracy:.{ACCURACY_DIGITS}f}"


def _data_lines(lines: Iterable[str]) -> Iterator[str]:
    """Drop the header line and trailing newlines."""
    it = iter(lines)
    next(it, None)
    for line in it:
        yield line.rstrip("\r\n")


def _label_of(field: TextValue) -> int:
    return POSITIVE if is_positive_label(field) else NEGATIVE


class ClassifierPipeline:
    """
    Train / predict / evaluate over one lexicon and one prediction record.

    A fresh instance has an empty lexicon; nothing persists across
    instances. Training again adds to the existing counts.

    Args:
        min_token_length: Shortest token counted by the lexicon
        keep_records: Keep (text, label) pairs of the last training pass,
            for cross-validation
    """

    def __init__(self, min_token_length: int = MIN_TOKEN_LENGTH, keep_records: bool = False):
        self.lexicon = LexiconModel(min_token_length=min_token_length)
        self.predictions: Dict[TextValue, int] = {}
        self.training_positive_count = 0
        self.training_negative_count = 0
        self.state = PipelineState.UNTRAINED
        self.last_evaluation: Optional[EvaluationResult] = None
        self.keep_records = keep_records
        self.training_records: List[Tuple[str, int]] = []

    @staticmethod
    def _fail(what: str, err: object) -> bool:
        print(f"Error {what}: {err}", file=sys.stderr)
        return False

    # ---------- phase 1 ----------
    def train(self, lines: Optional[Iterable[str]]) -> bool:
        if lines is None:
            return self._fail("reading training input", "no input supplied")

        records: List[Tuple[str, int]] = []
        try:
            for line in _data_lines(lines):
                fields = parse_csv_line(line, has_label=True)
                if len(fields) < TRAIN_COLUMNS:
                    continue

                label = _label_of(fields[TRAIN_LABEL_COL])
                positive = label == POSITIVE
                if positive:
                    self.training_positive_count += 1
                else:
                    self.training_negative_count += 1

                text = fields[TRAIN_TEXT_COL]
                self.lexicon.update_all(tokenize(text), positive)
                if self.keep_records:
                    records.append((str(text), label))
        except OSError as e:
            return self._fail("reading training input", e)

        if self.keep_records:
            self.training_records = records
        self.state = PipelineState.TRAINED

        total = self.training_positive_count + self.training_negative_count
        print(
            f"[train] Processed {total} tweets ({self.training_positive_count} positive, "
            f"{self.training_negative_count} negative)."
        )
        print(f"[train] Vocabulary size: {len(self.lexicon)} words.")
        return True

    # ---------- phase 2 ----------
    def predict(self, lines: Optional[Iterable[str]], sink: Optional[TextIO]) -> bool:
        if lines is None:
            return self._fail("reading test input", "no input supplied")
        if sink is None:
            return self._fail("writing predictions output", "no sink supplied")
        if self.state is PipelineState.UNTRAINED:
            print(
                "Warning: predicting with an untrained model; every tweet will be labelled negative.",
                file=sys.stderr,
            )

        made = 0
        try:
            for line in _data_lines(lines):
                fields = parse_csv_line(line, has_label=False)
                if len(fields) < TEST_COLUMNS:
                    continue

                tweet_id = fields[TEST_ID_COL]
                label = self.lexicon.classify(tokenize(fields[TEST_TEXT_COL]))
                self.predictions[tweet_id.copy()] = label
                sink.write(f"{label},{tweet_id}\n")
                made += 1
        except OSError as e:
            return self._fail("during prediction", e)

        self.state = PipelineState.PREDICTED
        print(f"[predict] Made {made} predictions ({len(self.predictions)} distinct ids).")
        return True

    # ---------- phase 3 ----------
    def evaluate(self, truth_lines: Optional[Iterable[str]], sink: Optional[TextIO]) -> bool:
        if truth_lines is None:
            return self._fail("reading ground truth input", "no input supplied")
        if sink is None:
            return self._fail("writing accuracy output", "no sink supplied")

        correct = 0
        misclassifications: List[Misclassification] = []
        y_true: List[int] = []
        y_pred: List[int] = []
        try:
            for line in _data_lines(truth_lines):
                fields = parse_csv_line(line, has_label=True)
                if len(fields) < TRUTH_COLUMNS:
                    continue

                tweet_id = fields[TRUTH_ID_COL]
                predicted = self.predictions.get(tweet_id)
                if predicted is None:
                    continue

                actual = _label_of(fields[TRUTH_LABEL_COL])
                y_true.append(actual)
                y_pred.append(predicted)
                if predicted == actual:
                    correct += 1
                else:
                    misclassifications.append(Misclassification(predicted, actual, tweet_id))
        except OSError as e:
            return self._fail("reading ground truth input", e)

        total = len(y_true)
        if total > 0:
            accuracy = correct / total
        else:
            accuracy = 0.0
            print(
                "Warning: No predictions were matched with ground truth! "
                "Check that your files contain matching tweet IDs.",
                file=sys.stderr,
            )

        result = EvaluationResult(
            accuracy=accuracy,
            correct=correct,
            total=total,
            misclassifications=misclassifications,
            y_true=y_true,
            y_pred=y_pred,
            metrics=self._summary_metrics(y_true, y_pred),
        )

        try:
            sink.write(result.accuracy_line() + "\n")
            for m in misclassifications:
                sink.write(m.render() + "\n")
        except OSError as e:
            return self._fail("writing accuracy output", e)

        self.last_evaluation = result
        self.state = PipelineState.EVALUATED
        print(f"[eval] Accuracy: {accuracy * 100.0:.2f}%")
        print(f"[eval] {correct} correct predictions out of {total}")
        print(f"[eval] {len(misclassifications)} misclassifications.")
        return True

    @staticmethod
    def _summary_metrics(y_true: List[int], y_pred: List[int]) -> Dict[str, object]:
        if not y_true:
            return {}
        return {
            "confusion_matrix": confusion_matrix(y_true, y_pred).tolist(),
            "precision_macro": precision_score(y_true, y_pred, average="macro", zero_division=0),
            "recall_macro": recall_score(y_true, y_pred, average="macro", zero_division=0),
            "f1_macro": f1_score(y_true, y_pred, average="macro", zero_division=0),
        }
