import logging
from binforest.dataset import load_binary_dataset, split_cross_set


logger = logging.getLogger(__name__)


def prepare_holdout_data(args):
    """Load the dataset and hold out the last examples as the cross set."""
    data = load_binary_dataset(args.dataset_stem)
    train_data, cross_data = split_cross_set(data, args.cross_fraction)
    return train_data, cross_data
