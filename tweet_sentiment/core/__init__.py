# Core components for tweet sentiment classification

from .text_value import TextValue, TextIndexError
from .csv_line import parse_csv_line, is_positive_label
from .tokenizer import tokenize
from .metrics import (
    accuracy_score,
    precision_score,
    recall_score,
    f1_score,
    confusion_matrix,
    classification_report,
    compute_all_metrics,
)
from .cross_validation import (
    stratified_kfold_indices,
    cross_validate,
    nested_cv,
    holdout_evaluate,
)

__all__ = [
    "TextValue",
    "TextIndexError",
    "parse_csv_line",
    "is_positive_label",
    "tokenize",
    "accuracy_score",
    "precision_score",
    "recall_score",
    "f1_score",
    "confusion_matrix",
    "classification_report",
    "compute_all_metrics",
    "stratified_kfold_indices",
    "cross_validate",
    "nested_cv",
    "holdout_evaluate",
]
