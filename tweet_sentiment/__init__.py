"""
This package contains the implementation of a frequency-lexicon sentiment
classifier for short social-media texts (tweets labelled 0 = negative,
4 = positive).

Key modules:
- text_value: Owned byte-string value type used by every text operation
- csv_line: Quote-aware CSV field splitting
- tokenizer: Lowercase word tokenization on a fixed delimiter set
- metrics: Custom metrics computation
- cross_validation: Stratified k-fold and holdout evaluation
- lexicon: Word-count lexicon model and estimator wrapper
- classifier_pipeline: Train / predict / evaluate orchestration
- visualization: Report plots and summary tables
"""

__version__ = "0.1.0"
