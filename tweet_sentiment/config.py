# config.py
"""Shared constants for the tweet sentiment classifier."""
from typing import Any, Dict, List

# ---------------- Polarity labels ----------------
NEGATIVE = 0
POSITIVE = 4
POLARITY_LABELS = (NEGATIVE, POSITIVE)
TARGET_NAMES = ["Negative", "Positive"]

# First byte of a label field that marks a positive example
POSITIVE_MARK = ord("4")

# ---------------- Text handling ----------------
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"

TOKEN_DELIMITERS = b" ,.!?;:\"'()[]{}@#$%^&*-_=+<>/\\|~`"

# Tokens shorter than this never enter the lexicon
MIN_TOKEN_LENGTH = 2

# ---------------- Column layouts ----------------
# training: sentiment,id,date,query,user,text
TRAIN_COLUMNS = 6
TRAIN_LABEL_COL = 0
TRAIN_ID_COL = 1
TRAIN_TEXT_COL = 5

# test: id,date,query,user,text
TEST_COLUMNS = 5
TEST_ID_COL = 0
TEST_TEXT_COL = 4

# ground truth: sentiment,id[,...]
TRUTH_COLUMNS = 2
TRUTH_LABEL_COL = 0
TRUTH_ID_COL = 1

ACCURACY_DIGITS = 3

# ---------------- Experiment defaults ----------------
DEFAULT_CV_FOLDS = 5
DEFAULT_HOLDOUT = 0.2
DEFAULT_SEED = 42
DEFAULT_TOP_WORDS = 20

LEXICON_GRID: Dict[str, List[Any]] = {
    "min_token_length": [2, 3, 4],
}
LEXICON_GRID_FAST: Dict[str, List[Any]] = {
    "min_token_length": [MIN_TOKEN_LENGTH],
}
