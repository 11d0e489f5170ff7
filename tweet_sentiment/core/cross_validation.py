# cross_validation.py
"""
Stratified k-fold, nested CV and holdout evaluation for text estimators
following the fit(texts, y) / predict(texts) convention.
"""
import random
from typing import Any, Callable, Dict, List, Sequence, Tuple

import numpy as np
from sklearn.model_selection import train_test_split

from ..config import DEFAULT_SEED
from .metrics import accuracy_score, compute_all_metrics, f1_score

EstimatorFactory = Callable[[Dict[str, Any]], Any]


def stratified_kfold_indices(y: Sequence[int], k: int, seed: int = DEFAULT_SEED) -> List[Tuple[List[int], List[int]]]:
    """
    Split indices into ``k`` (train, validation) pairs with per-label balance.

    Each label bucket is shuffled and dealt round-robin over the folds, so
    every fold is non-empty as long as ``len(y) >= k``.
    """
    if k < 2:
        raise ValueError(f"k must be at least 2, got {k}")
    if len(y) < k:
        raise ValueError(f"cannot make {k} folds from {len(y)} samples")

    rng = random.Random(seed)
    buckets: Dict[int, List[int]] = {}
    for i, yi in enumerate(y):
        buckets.setdefault(int(yi), []).append(i)

    val_splits: List[List[int]] = [[] for _ in range(k)]
    offset = 0
    for label in sorted(buckets):
        b = buckets[label]
        rng.shuffle(b)
        for j, idx in enumerate(b):
            val_splits[(offset + j) % k].append(idx)
        # continue dealing where the previous bucket stopped
        offset = (offset + len(b)) % k

    all_idx = set(range(len(y)))
    out = []
    for val in val_splits:
        val_idx = sorted(val)
        train_idx = sorted(all_idx - set(val_idx))
        out.append((train_idx, val_idx))
    return out


def _take(items: Sequence, idx: List[int]) -> list:
    return [items[i] for i in idx]


def cross_validate(
    X: Sequence[str],
    y: Sequence[int],
    k: int,
    estimator_factory: EstimatorFactory,
    params: Dict[str, Any] = None,
    seed: int = DEFAULT_SEED,
) -> Dict[str, Any]:
    """Fit/score one parameter set on each fold; report accuracy and macro F1."""
    params = params or {}
    fold_scores = []
    for fi, (tr_idx, va_idx) in enumerate(stratified_kfold_indices(y, k, seed), 1):
        est = estimator_factory(params)
        est.fit(_take(X, tr_idx), _take(y, tr_idx))
        y_va = _take(y, va_idx)
        pred = est.predict(_take(X, va_idx))
        acc = accuracy_score(y_va, pred)
        f1 = f1_score(y_va, pred, average="macro", zero_division=0)
        fold_scores.append({"fold": fi, "accuracy": acc, "f1_macro": f1, "size": len(va_idx)})
        print(f"[cv] fold {fi}/{k}: acc={acc:.4f}  f1={f1:.4f}  (n={len(va_idx)})")

    accs = np.array([s["accuracy"] for s in fold_scores])
    f1s = np.array([s["f1_macro"] for s in fold_scores])
    return {
        "params": params,
        "fold_scores": fold_scores,
        "mean_accuracy": float(accs.mean()),
        "std_accuracy": float(accs.std()),
        "mean_f1": float(f1s.mean()),
        "std_f1": float(f1s.std()),
    }


def nested_cv(
    X: Sequence[str],
    y: Sequence[int],
    outer_k: int,
    inner_k: int,
    estimator_factory: EstimatorFactory,
    param_grid: List[Dict[str, Any]],
    seed: int = DEFAULT_SEED,
) -> Dict[str, Any]:
    """Pick params by inner-fold macro F1, score them on the outer fold."""
    if not param_grid:
        raise ValueError("param_grid must not be empty")

    outer_scores = []
    best_params_by_outer = []
    for oi, (tr_idx, te_idx) in enumerate(stratified_kfold_indices(y, outer_k, seed), 1):
        print(f"[cv] outer fold {oi}/{outer_k}")
        X_tr, y_tr = _take(X, tr_idx), _take(y, tr_idx)
        X_te, y_te = _take(X, te_idx), _take(y, te_idx)

        best_f1, best_params = -1.0, None
        for pi, p in enumerate(param_grid, 1):
            inner_scores = []
            for tr2, va2 in stratified_kfold_indices(y_tr, inner_k, seed + oi):
                est = estimator_factory(p)
                est.fit(_take(X_tr, tr2), _take(y_tr, tr2))
                pred = est.predict(_take(X_tr, va2))
                inner_scores.append(f1_score(_take(y_tr, va2), pred, average="macro", zero_division=0))
            mean_inner = float(np.mean(inner_scores))
            print(f"[cv]   [{pi}/{len(param_grid)}] params={p}  inner_f1={mean_inner:.4f}")
            if mean_inner > best_f1:
                best_f1, best_params = mean_inner, p

        est = estimator_factory(best_params)
        est.fit(X_tr, y_tr)
        pred = est.predict(X_te)
        f1 = f1_score(y_te, pred, average="macro", zero_division=0)
        acc = accuracy_score(y_te, pred)
        outer_scores.append((f1, acc))
        best_params_by_outer.append(best_params)
        print(f"[cv]   best={best_params}  F1={f1:.4f}  Acc={acc:.4f}")

    f1s = np.array([s[0] for s in outer_scores])
    return {
        "outer_scores": outer_scores,
        "best_params_by_outer": best_params_by_outer,
        "mean_f1": float(f1s.mean()),
        "std_f1": float(f1s.std()),
    }


def holdout_evaluate(
    X: Sequence[str],
    y: Sequence[int],
    estimator_factory: EstimatorFactory,
    params: Dict[str, Any] = None,
    test_size: float = 0.2,
    random_state: int = DEFAULT_SEED,
) -> Dict[str, Any]:
    """
    Stratified train/test split, then compare train and test metrics.

    The returned ``overfitting_gap`` is train minus test for accuracy and
    macro F1.
    """
    params = params or {}
    X_tr, X_te, y_tr, y_te = train_test_split(
        list(X),
        list(y),
        test_size=test_size,
        random_state=random_state,
        stratify=list(y),
    )
    est = estimator_factory(params)
    est.fit(X_tr, y_tr)
    train_metrics = compute_all_metrics(y_tr, est.predict(X_tr))
    test_metrics = compute_all_metrics(y_te, est.predict(X_te))
    gap = {
        "accuracy": train_metrics["accuracy"] - test_metrics["accuracy"],
        "f1_macro": train_metrics["f1_macro"] - test_metrics["f1_macro"],
    }
    print(
        f"[holdout] train={len(X_tr)} test={len(X_te)}  "
        f"test acc={test_metrics['accuracy']:.4f}  gap={gap['accuracy']:.4f}"
    )
    return {
        "params": params,
        "train_metrics": train_metrics,
        "test_metrics": test_metrics,
        "overfitting_gap": gap,
        "train_size": len(X_tr),
        "test_size": len(X_te),
    }
