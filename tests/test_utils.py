import numpy as np
import pytest

from binforest.utils import best_split, binary_entropy, entropy, information_gain, majority_label


def test_entropy_of_label_sets():
    assert entropy([0, 0, 1, 1]) == pytest.approx(1.0)
    assert entropy([1, 1, 1]) == 0
    assert entropy([]) == 0
    assert entropy([0, 1, 1, 1]) == pytest.approx(0.811278, abs=1e-6)


def test_binary_entropy_is_elementwise():
    h = binary_entropy([0, 1, 2, 0, 1], [2, 2, 2, 0, 4])

    assert h[0] == 0
    assert h[1] == pytest.approx(1.0)
    assert h[2] == 0
    assert h[3] == 0
    assert h[4] == pytest.approx(0.811278, abs=1e-6)


def test_information_gain_of_perfect_and_useless_splits():
    assert information_gain([0, 0, 1, 1], [0, 0], [1, 1]) == pytest.approx(1.0)
    assert information_gain([0, 1, 0, 1], [0, 1], [0, 1]) == pytest.approx(0.0)
    assert information_gain([], [], []) == 0


def test_majority_label_ties_resolve_to_zero():
    assert majority_label([0, 1, 1]) == 1
    assert majority_label([0, 0, 1]) == 0
    assert majority_label([0, 1]) == 0
    assert majority_label([]) == 0


def test_best_split_agrees_with_information_gain():
    X = np.array([[0, 1, 1], [0, 0, 1], [1, 1, 0], [1, 1, 1], [0, 0, 0]])
    y = np.array([0, 0, 1, 1, 1])
    examples = np.arange(5)

    feature, gain = best_split(X, y, examples, {0, 1, 2})

    expected = [information_gain(y, y[X[:, f] == 0], y[X[:, f] == 1]) for f in range(3)]
    assert feature == int(np.argmax(expected))
    assert gain == pytest.approx(max(expected))


def test_best_split_prefers_lowest_index_on_ties():
    X = np.array([[0, 0], [0, 0], [1, 1], [1, 1]])
    y = np.array([0, 0, 1, 1])

    feature, gain = best_split(X, y, np.arange(4), {1, 0})

    assert feature == 0
    assert gain == pytest.approx(1.0)


def test_best_split_only_looks_at_given_examples():
    X = np.array([[0, 1], [1, 0], [0, 0], [1, 1]])
    y = np.array([1, 0, 0, 1])

    # on examples 0 and 1 both features separate the labels, feature 1 alone on all four
    assert best_split(X, y, np.array([0, 1]), {0, 1})[0] == 0
    assert best_split(X, y, np.arange(4), {0, 1})[0] == 1


def test_best_split_without_gain_returns_none():
    X = np.array([[0], [1], [0], [1]])
    y = np.array([0, 0, 1, 1])

    assert best_split(X, y, np.arange(4), {0}) == (None, 0.0)
    assert best_split(X, y, np.array([], dtype=int), {0}) == (None, 0.0)
    assert best_split(X, y, np.arange(4), set()) == (None, 0.0)
