import argparse
from enum import Enum
from multiprocessing import cpu_count


__all__ = [
    'cmd_args', 'validate_args',
    'ClassifierType', 'classifier_type_arg', 'AccuracyMetric', 'accuracy_metric_arg',
]


def cmd_args(parser):
    """Arguments for running the main application"""
    parser.add_argument('--name', '-n', help='Experiment name')
    parser.add_argument('--verbose', '-v', action='store_true', help='Emit debug log messages')
    parser.add_argument('--deterministic', action='store_true', help='Run the application in a deterministic way')
    parser.add_argument('--global-seed', '--seed', type=int, default=123, dest='global_seed',
                        help='Global seed for the application. Used if deterministic is set to True')
    parser.add_argument('--yaml-cfg-file', help='YAML file containing the experiment description')

    app_args = parser.add_argument_group("Problem-specific arguments")

    # Dataset-specific arguments
    app_args.add_argument("--dataset-stem", type=str,
                          help="File stem of the dataset: <stem>.train, and optionally <stem>.test and <stem>.names")
    app_args.add_argument("--cross-fraction", type=float, default=0.25,
                          help="Fraction of the training examples (taken from the end) held out as the cross set. "
                               "Default is 0.25.")

    # Classifier-specific arguments
    app_args.add_argument("--classifier-type", type=classifier_type_arg, default='decisionforest',
                          help=f"Specify the type of classifier to use. "
                               f"Options: {' | '.join(str_to_classifier_type_map.keys())}")
    app_args.add_argument("--forest-size", type=int, default=None,
                          help="Number of trees in the forest (only for the decision forest).")
    app_args.add_argument("--bag-examples", action='store_true',
                          help="Train every tree of the forest on its own random subset of examples, "
                               "instead of only on a random subset of features.")
    app_args.add_argument("--workers", type=int, default=1,
                          help="Number of threads used to build the trees of the forest. 0 uses all CPUs.")
    app_args.add_argument("--accuracy-metric", type=accuracy_metric_arg, default='accuracy',
                          help=f"Metric reported on the cross set. "
                               f"Options: {' | '.join(str_to_accuracy_metric_map.keys())}")
    return parser


def validate_args(args):
    if not args.deterministic:
        args.global_seed = None
    if args.workers == 0:
        args.workers = cpu_count()
    if args.workers < 0:
        raise ValueError(f"--workers must be non-negative (received {args.workers})")
    if args.dataset_stem is None:
        raise ValueError("Specify the dataset with --dataset-stem or in the yaml configuration file")
    if args.classifier_type == ClassifierType.DecisionForest:
        if args.forest_size is None or args.forest_size < 1:
            raise ValueError(f"A decision forest needs a positive --forest-size (received {args.forest_size})")
    if not 0 <= args.cross_fraction < 1:
        raise ValueError(f"--cross-fraction must be in [0, 1) (received {args.cross_fraction})")


### Enumeration and argument type functions

class ClassifierType(Enum):
    DecisionTree = 0
    DecisionForest = 1

str_to_classifier_type_map = {
    entry.name.lower(): entry for entry in ClassifierType
}

def classifier_type_arg(classifier_str):
    try:
        return str_to_classifier_type_map[classifier_str.lower()]
    except KeyError:
        raise argparse.ArgumentTypeError('--classifier-type argument must be one of {0} (received {1})'.format(
            list(str_to_classifier_type_map.keys()), classifier_str
        ))


class AccuracyMetric(Enum):
    Accuracy = 0
    F1 = 1

str_to_accuracy_metric_map = {
    'accuracy': AccuracyMetric.Accuracy,
    'f1': AccuracyMetric.F1
}

def accuracy_metric_arg(metric_str):
    if metric_str is None:
        return
    try:
        return str_to_accuracy_metric_map[metric_str.replace('_', '').replace('-', '').lower()]
    except KeyError:
        raise argparse.ArgumentTypeError('--accuracy-metric argument must be one of {0} (received {1})'.format(
            list(str_to_accuracy_metric_map.keys()), metric_str
        ))
