import io
import os
import subprocess
import sys
from pathlib import Path

import pytest

from tweet_sentiment.experiments.classifier_pipeline import ClassifierPipeline, PipelineState

TRAIN_HEADER = "sentiment,id,date,query,user,text\n"
TEST_HEADER = "id,date,query,user,text\n"
TRUTH_HEADER = "sentiment,id\n"


def _train_lines(*rows):
    return [TRAIN_HEADER] + [f"{s},{i},Mon Apr 06,NO_QUERY,user,{t}\n" for s, i, t in rows]


def _test_lines(*rows):
    return [TEST_HEADER] + [f"{i},Mon Apr 06,NO_QUERY,user,{t}\n" for i, t in rows]


def _truth_lines(*rows):
    return [TRUTH_HEADER] + [f"{s},{i}\n" for s, i in rows]


def test_end_to_end_tie_predicts_negative():
    p = ClassifierPipeline()
    assert p.state is PipelineState.UNTRAINED
    assert p.train(_train_lines((4, 1, '"good good"'), (0, 2, '"bad bad"')))
    assert p.state is PipelineState.TRAINED

    out = io.StringIO()
    assert p.predict(_test_lines((3, '"good bad"')), out)
    assert out.getvalue() == "0,3\n"
    assert p.state is PipelineState.PREDICTED

    acc = io.StringIO()
    assert p.evaluate(_truth_lines((0, 3)), acc)
    assert acc.getvalue() == "1.000\n"
    assert p.state is PipelineState.EVALUATED
    assert p.last_evaluation.misclassifications == []


def test_training_counters_and_malformed_lines():
    p = ClassifierPipeline()
    lines = _train_lines((4, 1, "nice day"), (0, 2, "rainy day"), (4, 3, "nice")) + ["4,9,too,few\n"]
    assert p.train(lines)
    assert p.training_positive_count == 2
    assert p.training_negative_count == 1
    assert p.lexicon.get("nice").positive == 2
    assert p.lexicon.get("day").negative == 1


def test_header_always_skipped():
    p = ClassifierPipeline()
    # header looks like a valid positive row
    assert p.train(["4,0,d,q,u,header\n", "0,1,d,q,u,body\n"])
    assert "header" not in p.lexicon
    assert p.training_positive_count == 0


def test_predictions_emitted_in_input_order_and_overwrite():
    p = ClassifierPipeline()
    p.train(_train_lines((4, 1, "happy"), (0, 2, "sad")))
    out = io.StringIO()
    p.predict(_test_lines((10, "happy"), (11, "sad"), ("x", "short,row"), (10, "sad")) + ["1,2\n"], out)
    assert out.getvalue().splitlines() == ["4,10", "0,11", "0,x", "0,10"]
    assert p.predictions[next(k for k in p.predictions if str(k) == "10")] == 0


def test_evaluate_counts_and_misclassifications_in_order():
    p = ClassifierPipeline()
    p.train(_train_lines((4, 1, "happy"), (0, 2, "sad")))
    p.predict(_test_lines((10, "happy"), (11, "sad"), (12, "happy"), (13, "sad")), io.StringIO())
    acc = io.StringIO()
    truth = _truth_lines((0, 12), (4, 10), (4, 13), (0, 99), (0, 11)) + ["lonely\n"]
    assert p.evaluate(truth, acc)
    assert acc.getvalue().splitlines() == ["0.500", "4,0,12", "0,4,13"]
    res = p.last_evaluation
    assert (res.correct, res.total) == (2, 4)
    assert res.accuracy == pytest.approx(0.5)
    assert res.metrics["confusion_matrix"] == [[1, 1], [1, 1]]


def test_accuracy_rounds_to_three_digits():
    p = ClassifierPipeline()
    p.train(_train_lines((4, 1, "yes")))
    p.predict(_test_lines((1, "yes"), (2, "yes"), (3, "yes")), io.StringIO())
    acc = io.StringIO()
    p.evaluate(_truth_lines((4, 1), (4, 2), (0, 3)), acc)
    assert acc.getvalue().splitlines()[0] == "0.667"


def test_zero_matches_reports_zero_with_warning(capsys):
    p = ClassifierPipeline()
    p.train(_train_lines((4, 1, "good")))
    p.predict(_test_lines((5, "good")), io.StringIO())
    acc = io.StringIO()
    assert p.evaluate(_truth_lines((4, 6)), acc)
    assert acc.getvalue() == "0.000\n"
    captured = capsys.readouterr()
    assert "Warning: No predictions were matched" in captured.err
    assert "Warning" not in captured.out
    assert p.last_evaluation.metrics == {}


def test_untrained_predict_is_all_negative(capsys):
    p = ClassifierPipeline()
    out = io.StringIO()
    assert p.predict(_test_lines((1, "great stuff"), (2, "awful")), out)
    assert out.getvalue() == "0,1\n0,2\n"
    assert "untrained" in capsys.readouterr().err


def test_retraining_accumulates():
    p = ClassifierPipeline()
    lines = _train_lines((4, 1, "sunny"))
    p.train(lines)
    p.train(lines)
    assert p.lexicon.get("sunny").positive == 2
    assert p.training_positive_count == 2


def test_crlf_lines_are_trimmed():
    p = ClassifierPipeline()
    p.train([TRAIN_HEADER, "4,1,d,q,u,fine\r\n"])
    assert "fine" in p.lexicon
    p.predict([TEST_HEADER, "7,d,q,u,fine\r\n"], io.StringIO())
    acc = io.StringIO()
    p.evaluate([TRUTH_HEADER, "4,7\r\n"], acc)
    assert acc.getvalue() == "1.000\n"


def test_empty_inputs_succeed():
    p = ClassifierPipeline()
    assert p.train([])
    assert p.predict([], io.StringIO())
    acc = io.StringIO()
    assert p.evaluate([], acc)
    assert acc.getvalue() == "0.000\n"


class _BrokenLines:
    def __iter__(self):
        yield TRAIN_HEADER
        raise OSError("disk went away")


def test_io_failures_are_phase_failures(capsys):
    p = ClassifierPipeline()
    assert not p.train(None)
    assert not p.train(_BrokenLines())
    assert p.state is PipelineState.UNTRAINED
    assert not p.predict(None, io.StringIO())
    assert not p.predict([], None)
    assert not p.evaluate(None, io.StringIO())
    assert "Error" in capsys.readouterr().err


def test_keep_records_for_cross_validation():
    p = ClassifierPipeline(keep_records=True)
    p.train(_train_lines((4, 1, '"nice, really"'), (0, 2, "bad")))
    assert p.training_records == [("nice, really", 4), ("bad", 0)]


def test_pipeline_import_leaves_plotting_unloaded():
    code = (
        "import sys\n"
        "import tweet_sentiment.experiments.classifier_pipeline\n"
        "assert 'seaborn' not in sys.modules\n"
        "assert 'matplotlib' not in sys.modules\n"
    )
    root = Path(__file__).resolve().parents[1]
    env = dict(os.environ, PYTHONPATH=str(root))
    proc = subprocess.run([sys.executable, "-c", code], cwd=root, env=env, capture_output=True, text=True)
    assert proc.returncode == 0, proc.stderr
