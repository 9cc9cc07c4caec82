import logging
import logging.config
import os
import sys
import random
import argparse
import numpy as np
import yaml
from collections import Counter
from enum import Enum
from datetime import datetime
from binforest import project_dir
from binforest.args import cmd_args, validate_args


__all__ = [
    'env_cfg', 'cfg_from_yaml', 'logging_cfg', 'get_timestamp',
    'entropy', 'binary_entropy', 'information_gain', 'best_split', 'majority_label',
]

logger = logging.getLogger(__name__)

# gains below this are rounding noise of an uninformative split
GAIN_TOLERANCE = 1e-12


def env_cfg(argv=None):
    """Configure the environment to train and evaluate the classifiers"""
    parser = argparse.ArgumentParser("Binary decision trees and forests - hold-out evaluation")
    parser = cmd_args(parser)
    args = parser.parse_args(argv)

    # overwrite if a yaml configuration file is given
    if args.yaml_cfg_file is not None:
        cfg_from_yaml(args, args.yaml_cfg_file)

    # check for errors
    validate_args(args)

    if args.deterministic:
        np.random.seed(args.global_seed)
        random.seed(args.global_seed)

    # configure logging
    logging_cfg(args)

    # trees are built recursively, one level per feature
    if sys.getrecursionlimit() < 10000:
        sys.setrecursionlimit(10000)

    return args


def cfg_from_yaml(args, cfg_yaml_file):
    """Configure environment based on arguments from a yaml file
    """
    def replace_arg(name, value):
        # special handling for Enum type of arguments
        if isinstance(getattr(args, name, None), Enum) and value is not None:
            assert isinstance(value, str)
            value = next(entry.value for entry in getattr(args, name).__class__
                         if entry.name.lower() == value.lower())
            value = getattr(args, name).__class__(value)
        # special handling for lists (nargs='+/*/?')
        elif isinstance(getattr(args, name, None), list) and value is not None:
            value = [value] if not isinstance(value, list) else value
        setattr(args, name, value)

    # read configuration file
    with open(cfg_yaml_file, 'r') as stream:
        yaml_dict = yaml.safe_load(stream)

    # inspect all arguments
    for name, value in yaml_dict.items():
        # we assume a two-level nested dictionary
        if isinstance(value, dict):
            # usually this branch gets executed
            for _name, _value in value.items():
                replace_arg(_name, _value)
        else:
            # this is rarely executed
            replace_arg(name, value)


def logging_cfg(args):
    """Configure logging for entire framework"""
    if not os.path.exists(os.path.join(project_dir, 'logs')):
        os.makedirs(os.path.join(project_dir, 'logs'))

    # set the name of the log file and directory
    timestr = get_timestamp()
    exp_full_name = timestr if args.name is None else args.name + '___' + timestr
    logdir = os.path.join(project_dir, 'logs', exp_full_name)
    if not os.path.exists(logdir):
        os.makedirs(logdir)

    # use the logging config file
    log_filename = os.path.join(logdir, exp_full_name + '.log')
    logging.config.fileConfig(
        os.path.join(project_dir, 'logging.conf'),
        disable_existing_loggers=False,
        defaults={
            'main_log_filename': f'{project_dir}/logs/out.log',
            'all_log_filename': log_filename,
        }
    )
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # initialized logger and first messages
    logging.getLogger().logdir = logdir
    logger.log_filename = log_filename
    logger.info('Log file for this run: ' + os.path.realpath(log_filename))
    logger.debug("Command line: {}".format(" ".join(sys.argv)))
    arguments = {argument: getattr(args, argument) for argument in dir(args)
                 if not callable(getattr(args, argument)) and not argument.startswith('__')}
    logger.debug(f"Arguments: {arguments}")

    # Create a symbollic link to the last log file created (for easier access)
    try:
        os.unlink("latest_log_file")
    except FileNotFoundError:
        pass
    try:
        os.unlink("latest_log_dir")
    except FileNotFoundError:
        pass
    try:
        os.symlink(logdir, "latest_log_dir")
        os.symlink(log_filename, "latest_log_file")
    except OSError:
        logger.debug("Failed to create symlinks to latest logs")


def get_timestamp():
    return datetime.now().strftime("%Y.%m.%d-%H.%M.%S.%f")[:-3]


def entropy(y):
    """Compute the entropy (in bits) of a list of class labels y."""
    counts = Counter(y)
    total = len(y)
    if total == 0:
        return 0.0
    probabilities = [count / total for count in counts.values()]
    return -sum(p * np.log2(p) for p in probabilities if p > 0)


def binary_entropy(positives, totals):
    """
    Element-wise entropy (in bits) of binary label distributions.

    Parameters:
    - positives (array-like): Number of examples with label 1 in each set.
    - totals (array-like): Size of each set. Empty sets have zero entropy.

    Returns:
    - np.ndarray: Entropy of every set, 0 for pure or empty sets.
    """
    positives = np.asarray(positives, dtype=float)
    totals = np.asarray(totals, dtype=float)
    p = np.divide(positives, totals, out=np.zeros_like(positives), where=totals > 0)
    q = 1.0 - p
    with np.errstate(divide='ignore', invalid='ignore'):
        h = -(np.where(p > 0, p * np.log2(p), 0.0) + np.where(q > 0, q * np.log2(q), 0.0))
    return h


def information_gain(y, y_zero, y_one):
    """Entropy of y minus the size-weighted entropy of its two partitions."""
    total = len(y)
    if total == 0:
        return 0.0
    weighted = (len(y_zero) / total) * entropy(y_zero) + (len(y_one) / total) * entropy(y_one)
    return entropy(y) - weighted


def best_split(X, y, examples, features_to_consider):
    """Find the feature with the highest information gain among allowed features.

    Features are scored in ascending index order and the first one reaching the
    maximum gain wins. Returns (None, 0.0) when no feature reduces the entropy.
    """
    features = np.array(sorted(features_to_consider), dtype=np.intp)
    examples = np.asarray(examples, dtype=np.intp)
    if len(examples) == 0 or len(features) == 0:
        return None, 0.0

    labels = np.asarray(y)[examples].astype(np.int64)
    values = np.asarray(X)[np.ix_(examples, features)].astype(np.int64)
    total = len(examples)
    positives = labels.sum()

    # [value][label] counts for every candidate feature at once
    ones = values.sum(axis=0)
    zeros = total - ones
    ones_positive = values[labels == 1].sum(axis=0)
    zeros_positive = positives - ones_positive

    children_entropy = (zeros / total) * binary_entropy(zeros_positive, zeros) + \
                       (ones / total) * binary_entropy(ones_positive, ones)
    gains = binary_entropy(positives, total) - children_entropy

    max_gain = gains.max()
    if max_gain <= GAIN_TOLERANCE:
        return None, 0.0
    best = int(np.flatnonzero(gains >= max_gain - GAIN_TOLERANCE)[0])
    return int(features[best]), float(gains[best])


def majority_label(y):
    """Most common binary label in y, label 0 on ties (and for an empty y)."""
    counts = np.bincount(np.asarray(y, dtype=np.int64), minlength=2)
    return 1 if counts[1] > counts[0] else 0
