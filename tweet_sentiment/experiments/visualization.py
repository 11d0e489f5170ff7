# visualization.py
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path

from ..config import DEFAULT_TOP_WORDS, TARGET_NAMES


def plot_confusion_matrix(cm, save_path: Path, title: str = "Lexicon classifier"):
    """Heatmap of a 2x2 confusion matrix (rows actual, columns predicted)."""
    cm = np.asarray(cm, dtype=int)
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(5, 4))
    sns.heatmap(cm, annot=True, fmt="d", cmap="Blues", ax=ax, cbar=True, square=True)
    ax.set_title(f"{title}\nConfusion Matrix")
    ax.set_xlabel("Predicted")
    ax.set_ylabel("Actual")
    ax.set_xticklabels(TARGET_NAMES)
    ax.set_yticklabels(TARGET_NAMES)
    fig.tight_layout()
    fig.savefig(save_path, dpi=200, bbox_inches="tight")
    plt.close(fig)
    return save_path


def plot_top_words(lexicon, save_path: Path, n: int = DEFAULT_TOP_WORDS):
    """Horizontal bars of the most positive and most negative net counts."""
    positive, negative = lexicon.most_polar(n)
    rows = [(str(t), c) for t, c in reversed(negative)] + [(str(t), c) for t, c in reversed(positive)]
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(7, max(3, 0.3 * len(rows))))
    if rows:
        words, counts = zip(*rows)
        colors = ["tab:red" if c < 0 else "tab:green" for c in counts]
        ax.barh(range(len(words)), counts, color=colors)
        ax.set_yticks(range(len(words)))
        ax.set_yticklabels(words)
    ax.axvline(0, color="black", linewidth=0.8)
    ax.set_xlabel("positive count - negative count")
    ax.set_title("Most polar lexicon entries")
    fig.tight_layout()
    fig.savefig(save_path, dpi=200)
    plt.close(fig)
    return save_path


def export_summary_table(result, save_dir: Path, cv_results: dict = None) -> pd.DataFrame:
    """Write one-row evaluation summary as CSV and Markdown."""
    metrics = result.metrics or {}
    row = {
        "Accuracy": result.accuracy,
        "Correct": result.correct,
        "Matched": result.total,
        "Misclassified": len(result.misclassifications),
        "Precision_macro": metrics.get("precision_macro"),
        "Recall_macro": metrics.get("recall_macro"),
        "F1_macro": metrics.get("f1_macro"),
    }
    if cv_results:
        mean_acc = cv_results.get("mean_accuracy")
        std_acc = cv_results.get("std_accuracy")
        # nested CV only keeps per-outer-fold (f1, acc) pairs
        if mean_acc is None and cv_results.get("outer_scores"):
            accs = np.array([acc for _, acc in cv_results["outer_scores"]], dtype=float)
            mean_acc, std_acc = float(accs.mean()), float(accs.std())
        row["Mean_CV(Acc)"] = mean_acc
        row["Std_CV(Acc)"] = std_acc
        row["Mean_CV(F1)"] = cv_results.get("mean_f1")
        row["Std_CV(F1)"] = cv_results.get("std_f1")
    df = pd.DataFrame([row])

    save_dir = Path(save_dir)
    save_dir.mkdir(parents=True, exist_ok=True)
    df.to_csv(save_dir / "evaluation_summary.csv", index=False)
    (save_dir / "evaluation_summary.md").write_text(
        df.to_markdown(index=False, floatfmt=".4f"), encoding="utf-8"
    )
    return df
