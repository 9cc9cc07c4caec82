import argparse
import pytest

from binforest.args import (AccuracyMetric, ClassifierType, accuracy_metric_arg, classifier_type_arg,
                            cmd_args, validate_args)
from binforest.utils import cfg_from_yaml


def _parse(argv):
    return cmd_args(argparse.ArgumentParser()).parse_args(argv)


def test_classifier_type_arg_is_case_insensitive():
    assert classifier_type_arg("DecisionTree") == ClassifierType.DecisionTree
    assert classifier_type_arg("decisionforest") == ClassifierType.DecisionForest
    with pytest.raises(argparse.ArgumentTypeError):
        classifier_type_arg("svm")


def test_accuracy_metric_arg():
    assert accuracy_metric_arg("F1") == AccuracyMetric.F1
    assert accuracy_metric_arg("accuracy") == AccuracyMetric.Accuracy
    assert accuracy_metric_arg(None) is None
    with pytest.raises(argparse.ArgumentTypeError):
        accuracy_metric_arg("auc")


def test_defaults():
    args = _parse(["--dataset-stem", "data/example", "--forest-size", "11"])

    assert args.classifier_type == ClassifierType.DecisionForest
    assert args.accuracy_metric == AccuracyMetric.Accuracy
    assert args.cross_fraction == 0.25
    assert args.bag_examples is False
    assert args.workers == 1


def test_validate_clears_seed_unless_deterministic():
    args = _parse(["--dataset-stem", "x", "--forest-size", "3", "--seed", "9"])
    validate_args(args)
    assert args.global_seed is None

    args = _parse(["--dataset-stem", "x", "--forest-size", "3", "--seed", "9", "--deterministic"])
    validate_args(args)
    assert args.global_seed == 9


def test_validate_uses_all_cpus_for_zero_workers():
    args = _parse(["--dataset-stem", "x", "--forest-size", "3", "--workers", "0"])

    validate_args(args)

    assert args.workers >= 1


def test_validate_rejects_forest_without_size():
    args = _parse(["--dataset-stem", "x"])

    with pytest.raises(ValueError, match="forest-size"):
        validate_args(args)


def test_validate_accepts_tree_without_forest_size():
    args = _parse(["--dataset-stem", "x", "--classifier-type", "decisiontree"])

    validate_args(args)


def test_validate_rejects_missing_dataset_and_bad_fraction():
    with pytest.raises(ValueError, match="dataset"):
        validate_args(_parse(["--classifier-type", "decisiontree"]))
    with pytest.raises(ValueError, match="cross-fraction"):
        validate_args(_parse(["--dataset-stem", "x", "--classifier-type", "decisiontree",
                              "--cross-fraction", "1.5"]))


def test_yaml_overrides_command_line(tmp_path):
    cfg_file = tmp_path / "cfg.yaml"
    cfg_file.write_text(
        "dataset:\n"
        "  dataset_stem: data/other\n"
        "  cross_fraction: 0.5\n"
        "classifier:\n"
        "  classifier_type: decisiontree\n"
        "  accuracy_metric: f1\n"
        "workers: 3\n"
    )
    args = _parse(["--dataset-stem", "data/example", "--forest-size", "11"])

    cfg_from_yaml(args, str(cfg_file))

    assert args.dataset_stem == "data/other"
    assert args.cross_fraction == 0.5
    assert args.classifier_type == ClassifierType.DecisionTree
    assert args.accuracy_metric == AccuracyMetric.F1
    assert args.workers == 3
