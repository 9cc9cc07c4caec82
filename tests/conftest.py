import itertools
import numpy as np
import pytest

from binforest.dataset import BinaryDataSet


@pytest.fixture
def separable_data():
    """Feature 0 alone decides the label."""
    return BinaryDataSet([[0, 0], [0, 1], [1, 0], [1, 1]], [0, 0, 1, 1])


@pytest.fixture
def and_data():
    """Label is feature 0 AND feature 1, feature 2 is noise."""
    ex = [list(bits) for bits in itertools.product([0, 1], repeat=3)]
    labels = [int(x[0] and x[1]) for x in ex]
    return BinaryDataSet(ex, labels)


@pytest.fixture
def random_data():
    rng = np.random.default_rng(1234)
    ex = rng.integers(0, 2, size=(60, 6))
    labels = (ex[:, 0] & ex[:, 1]) | ex[:, 4]
    flip = rng.random(60) < 0.1
    labels = np.where(flip, 1 - labels, labels)
    return BinaryDataSet(ex, labels)


def all_vectors(num_attrs):
    return [list(bits) for bits in itertools.product([0, 1], repeat=num_attrs)]


@pytest.fixture
def vectors():
    return all_vectors
