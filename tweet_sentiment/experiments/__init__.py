# Pipeline components for tweet sentiment classification

from .classifier_pipeline import (
    ClassifierPipeline,
    EvaluationResult,
    Misclassification,
    PipelineState,
)

__all__ = [
    "ClassifierPipeline",
    "EvaluationResult",
    "Misclassification",
    "PipelineState",
]
