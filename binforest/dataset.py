import logging
import os.path
import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

__all__ = [
    'BinaryDataSet', 'load_binary_dataset', 'split_cross_set',
]


class BinaryDataSet:
    """
    In-memory training set of binary feature vectors and binary labels.

    The arrays are made read-only, so trees and forests can share one instance
    (also across threads) and refer to examples by index only.
    """
    def __init__(self, train_ex, train_label, attr_names=None, test_ex=None, test_label=None):
        self.train_ex = _binary_array(train_ex, ndim=2, what="Training examples")
        self.train_label = _binary_array(train_label, ndim=1, what="Training labels")
        if self.train_label.shape[0] != self.train_ex.shape[0]:
            raise ValueError(f"Got {self.train_label.shape[0]} labels for {self.train_ex.shape[0]} training examples")

        if attr_names is None:
            attr_names = [f"attr{i}" for i in range(self.num_attrs)]
        self.attr_names = list(attr_names)
        if len(self.attr_names) != self.num_attrs:
            raise ValueError(f"Got {len(self.attr_names)} attribute names for {self.num_attrs} attributes")

        self.test_ex = None
        self.test_label = None
        if test_ex is not None:
            self.test_ex = _binary_array(test_ex, ndim=2, what="Test examples")
            if self.test_ex.shape[0] > 0 and self.test_ex.shape[1] != self.num_attrs:
                raise ValueError(f"Test examples have {self.test_ex.shape[1]} attributes, "
                                 f"training examples have {self.num_attrs}")
            if test_label is not None:
                self.test_label = _binary_array(test_label, ndim=1, what="Test labels")
                if self.test_label.shape[0] != self.test_ex.shape[0]:
                    raise ValueError(f"Got {self.test_label.shape[0]} labels for {self.test_ex.shape[0]} test examples")

    @property
    def num_attrs(self):
        return self.train_ex.shape[1]

    @property
    def num_train_exs(self):
        return self.train_ex.shape[0]

    @property
    def num_test_exs(self):
        return 0 if self.test_ex is None else self.test_ex.shape[0]

    def __repr__(self):
        return f"BinaryDataSet(num_train_exs={self.num_train_exs}, num_attrs={self.num_attrs}, " \
               f"num_test_exs={self.num_test_exs})"


def _binary_array(values, ndim, what):
    array = np.array(values)
    if array.size == 0 and array.ndim < ndim:
        array = array.reshape((0,) * ndim)
    if array.ndim != ndim:
        raise ValueError(f"{what} must be a {ndim}-D array (got shape {array.shape})")
    if array.size and not np.isin(array, (0, 1)).all():
        raise ValueError(f"{what} must only contain the values 0 and 1")
    array = array.astype(np.int8)
    array.setflags(write=False)
    return array


def load_binary_dataset(filestem):
    """Load the <filestem>.train file, and the .test and .names files if they exist

    Every line holds the 0/1 attribute values of one example separated by
    whitespace; training examples end with their 0/1 label. Test examples may
    omit the label.
    """
    train_file = f"{filestem}.train"
    if not os.path.isfile(train_file):
        raise FileNotFoundError(f"Training file {train_file} does not exist")

    train_data = _read_table(train_file)
    if train_data.shape[1] < 2:
        raise ValueError(f"{train_file} must hold at least one attribute and the label on every line")
    train_ex = train_data[:, :-1]
    train_label = train_data[:, -1]
    num_attrs = train_ex.shape[1]

    attr_names = None
    names_file = f"{filestem}.names"
    if os.path.isfile(names_file):
        with open(names_file, 'r') as f:
            attr_names = [line.strip() for line in f if line.strip()]

    test_ex, test_label = None, None
    test_file = f"{filestem}.test"
    if os.path.isfile(test_file):
        test_data = _read_table(test_file)
        if test_data.shape[1] == num_attrs + 1:
            test_ex, test_label = test_data[:, :-1], test_data[:, -1]
        elif test_data.shape[1] == num_attrs or test_data.shape[0] == 0:
            test_ex = test_data.reshape(-1, num_attrs)
        else:
            raise ValueError(f"{test_file} has {test_data.shape[1]} columns, expected {num_attrs} or {num_attrs + 1}")

    data = BinaryDataSet(train_ex, train_label, attr_names=attr_names, test_ex=test_ex, test_label=test_label)
    logger.info(f"Loaded {filestem}: {data.num_train_exs} training examples, {data.num_test_exs} test examples, "
                f"{data.num_attrs} attributes")
    return data


def _read_table(filename):
    try:
        table = pd.read_csv(filename, sep=r'\s+', header=None, comment='#')
    except pd.errors.EmptyDataError:
        return np.zeros((0, 0), dtype=np.int8)
    if table.isnull().values.any():
        raise ValueError(f"{filename} has lines with missing values")
    return table.values


def split_cross_set(data, cross_fraction=0.25):
    """Hold out the last examples of the training set as a cross set

    Returns the reduced training set and the (examples, labels) of the cross set.
    """
    if not 0 <= cross_fraction < 1:
        raise ValueError(f"Cross set fraction must be in [0, 1) (received {cross_fraction})")
    cross_size = int(data.num_train_exs * cross_fraction)
    num_train = data.num_train_exs - cross_size
    if num_train == 0:
        raise ValueError("No training examples left after holding out the cross set")

    train_data = BinaryDataSet(data.train_ex[:num_train], data.train_label[:num_train],
                               attr_names=data.attr_names, test_ex=data.test_ex, test_label=data.test_label)
    cross_ex = data.train_ex[num_train:]
    cross_label = data.train_label[num_train:]
    logger.info(f"Splitting dataset: {num_train} training examples, {cross_size} cross examples")
    return train_data, (cross_ex, cross_label)
