#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Performance Metrics Implementation from Scratch

Classification metrics for the two polarity labels (0 = negative,
4 = positive), written without sklearn.metrics:
- Accuracy
- Precision / Recall / F1 (binary, macro, weighted, per-class)
- Confusion Matrix
- Classification Report

The positive class for "binary" averaging is the last label, which is 4
with the default label order.
"""

import numpy as np
from typing import Dict, List, Optional, Sequence, Tuple, Union

from ..config import POLARITY_LABELS, TARGET_NAMES

Labels = Optional[Sequence[int]]


def _resolve_labels(y_true: np.ndarray, y_pred: np.ndarray, labels: Labels) -> List[int]:
    if labels is not None:
        return list(labels)
    seen = set(y_true.tolist()) | set(y_pred.tolist())
    # keep the canonical polarity order whenever only polarity labels occur
    if seen <= set(POLARITY_LABELS):
        return list(POLARITY_LABELS)
    return sorted(seen)


def _as_arrays(y_true, y_pred) -> Tuple[np.ndarray, np.ndarray]:
    y_true = np.asarray(y_true, dtype=int)
    y_pred = np.asarray(y_pred, dtype=int)
    if y_true.shape != y_pred.shape:
        raise ValueError("y_true and y_pred must have the same length")
    return y_true, y_pred


def confusion_matrix(y_true, y_pred, labels: Labels = None) -> np.ndarray:
    """
    Rows are actual labels, columns are predicted labels.

    Pairs whose labels are not in ``labels`` are ignored.
    """
    y_true, y_pred = _as_arrays(y_true, y_pred)
    labels = _resolve_labels(y_true, y_pred, labels)
    index = {label: i for i, label in enumerate(labels)}

    cm = np.zeros((len(labels), len(labels)), dtype=int)
    for t, p in zip(y_true.tolist(), y_pred.tolist()):
        if t in index and p in index:
            cm[index[t], index[p]] += 1
    return cm


def accuracy_score(y_true, y_pred) -> float:
    """Fraction of exact matches; 0.0 for empty input."""
    y_true, y_pred = _as_arrays(y_true, y_pred)
    if y_true.size == 0:
        return 0.0
    return float(np.mean(y_true == y_pred))


def _per_class(cm: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    tp = np.diag(cm).astype(float)
    fp = cm.sum(axis=0) - tp
    fn = cm.sum(axis=1) - tp
    support = cm.sum(axis=1)
    return tp, fp, fn, support


def _safe_ratio(num: np.ndarray, den: np.ndarray, what: str, labels: List[int], zero_division) -> np.ndarray:
    out = np.zeros_like(num, dtype=float)
    fill = 1.0 if zero_division == 1 else 0.0
    for i in range(len(num)):
        if den[i] == 0:
            if zero_division == "warn":
                print(f"Warning: {what} is ill-defined for class {labels[i]}")
            out[i] = fill
        else:
            out[i] = num[i] / den[i]
    return out


def _average(values: np.ndarray, support: np.ndarray, average: Optional[str], y_true, y_pred):
    if average is None:
        return values
    if average == "binary":
        if len(values) != 2:
            raise ValueError("binary averaging requires exactly 2 classes")
        return float(values[1])
    if average == "macro":
        return float(np.mean(values)) if len(values) else 0.0
    if average == "micro":
        return accuracy_score(y_true, y_pred)
    if average == "weighted":
        if support.sum() == 0:
            return 0.0
        return float(np.average(values, weights=support))
    raise ValueError(f"Unknown averaging strategy: {average}")


def precision_score(
    y_true,
    y_pred,
    average: Optional[str] = "binary",
    labels: Labels = None,
    zero_division="warn",
) -> Union[float, np.ndarray]:
    """
    Precision = TP / (TP + FP).

    Args:
        y_true: Ground truth labels
        y_pred: Predicted labels
        average: 'binary', 'macro', 'micro', 'weighted' or None for per-class
        labels: Label order (defaults to (0, 4))
        zero_division: 'warn', 0 or 1
    """
    y_true, y_pred = _as_arrays(y_true, y_pred)
    labels = _resolve_labels(y_true, y_pred, labels)
    tp, fp, _, support = _per_class(confusion_matrix(y_true, y_pred, labels))
    values = _safe_ratio(tp, tp + fp, "Precision", labels, zero_division)
    return _average(values, support, average, y_true, y_pred)


def recall_score(
    y_true,
    y_pred,
    average: Optional[str] = "binary",
    labels: Labels = None,
    zero_division="warn",
) -> Union[float, np.ndarray]:
    """Recall = TP / (TP + FN). Arguments as for precision_score."""
    y_true, y_pred = _as_arrays(y_true, y_pred)
    labels = _resolve_labels(y_true, y_pred, labels)
    tp, _, fn, support = _per_class(confusion_matrix(y_true, y_pred, labels))
    values = _safe_ratio(tp, tp + fn, "Recall", labels, zero_division)
    return _average(values, support, average, y_true, y_pred)


def f1_score(
    y_true,
    y_pred,
    average: Optional[str] = "binary",
    labels: Labels = None,
    zero_division="warn",
) -> Union[float, np.ndarray]:
    """
    Per-class harmonic mean of precision and recall, then averaged.

    Macro F1 is the mean of per-class F1 values (not the F1 of the macro
    precision and recall).
    """
    y_true, y_pred = _as_arrays(y_true, y_pred)
    labels = _resolve_labels(y_true, y_pred, labels)
    tp, fp, fn, support = _per_class(confusion_matrix(y_true, y_pred, labels))
    values = _safe_ratio(2 * tp, 2 * tp + fp + fn, "F1", labels, zero_division)
    return _average(values, support, average, y_true, y_pred)


def classification_report(
    y_true,
    y_pred,
    labels: Labels = None,
    target_names: Optional[List[str]] = None,
    digits: int = 2,
) -> str:
    """Text table of per-class precision, recall, F1 and support."""
    y_true, y_pred = _as_arrays(y_true, y_pred)
    labels = _resolve_labels(y_true, y_pred, labels)
    if target_names is None:
        if labels == list(POLARITY_LABELS):
            target_names = list(TARGET_NAMES)
        else:
            target_names = [str(label) for label in labels]
    if len(target_names) != len(labels):
        raise ValueError("target_names length must match number of labels")

    p = precision_score(y_true, y_pred, average=None, labels=labels, zero_division=0)
    r = recall_score(y_true, y_pred, average=None, labels=labels, zero_division=0)
    f = f1_score(y_true, y_pred, average=None, labels=labels, zero_division=0)
    support = confusion_matrix(y_true, y_pred, labels).sum(axis=1)
    total = int(support.sum())

    width = max(len("weighted avg"), *(len(n) for n in target_names))
    head = f"{'':>{width}} {'precision':>9} {'recall':>9} {'f1-score':>9} {'support':>9}\n"
    blank = f"{'':>{width}}\n"

    def row(name, a, b, c, s):
        return f"{name:>{width}} {a:>9.{digits}f} {b:>9.{digits}f} {c:>9.{digits}f} {s:>9}\n"

    report = head + blank
    for name, a, b, c, s in zip(target_names, p, r, f, support):
        report += row(name, a, b, c, int(s))
    report += blank
    report += f"{'accuracy':>{width}} {'':>9} {'':>9} {accuracy_score(y_true, y_pred):>9.{digits}f} {total:>9}\n"
    report += row("macro avg", np.mean(p), np.mean(r), np.mean(f), total)
    if total:
        report += row(
            "weighted avg",
            np.average(p, weights=support),
            np.average(r, weights=support),
            np.average(f, weights=support),
            total,
        )
    return report


def compute_all_metrics(y_true, y_pred) -> Dict[str, float]:
    """Accuracy plus macro and weighted precision / recall / F1."""
    out = {"accuracy": accuracy_score(y_true, y_pred)}
    for avg in ("macro", "weighted"):
        out[f"precision_{avg}"] = precision_score(y_true, y_pred, average=avg, zero_division=0)
        out[f"recall_{avg}"] = recall_score(y_true, y_pred, average=avg, zero_division=0)
        out[f"f1_{avg}"] = f1_score(y_true, y_pred, average=avg, zero_division=0)
    return out
