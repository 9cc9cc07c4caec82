import logging
import numpy as np
from binforest.custom_models.dt.node import LeafNode, SplitNode
from binforest.utils import best_split, majority_label


logger = logging.getLogger(__name__)

# label of a leaf grown from an empty example subset, until its parent relabels it
PLACEHOLDER_LABEL = 0


class DecisionTree:
    """
    ID3 decision tree over binary features, for use on its own or in a forest.

    Parameters:
    - data (BinaryDataSet): Training set. It is only read, never copied.
    - attributes (iterable of int): Features eligible for splitting. All features if None.
    - examples (iterable of int): Training examples to build from. All examples if None.

    The tree is built once in the constructor and is read-only afterwards.
    """
    def __init__(self, data, attributes=None, examples=None):
        if data.num_attrs == 0:
            raise ValueError("Cannot build a decision tree on a dataset without features")
        self.num_attrs = data.num_attrs

        if attributes is None:
            attributes = range(data.num_attrs)
        attributes = frozenset(int(attr) for attr in attributes)
        out_of_range = sorted(attr for attr in attributes if not 0 <= attr < data.num_attrs)
        if out_of_range:
            raise ValueError(f"Feature indices {out_of_range} are outside the {data.num_attrs} available features")

        if examples is None:
            examples = np.arange(data.num_train_exs)
        examples = np.asarray(examples, dtype=np.intp).reshape(-1)
        if examples.size and (examples.min() < 0 or examples.max() >= data.num_train_exs):
            raise ValueError(f"Example indices must lie in [0, {data.num_train_exs})")

        self.root = build_tree(data, attributes, examples)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Built tree on {len(attributes)} features and {len(examples)} examples: "
                         f"{self.node_count} nodes, depth {self.depth}")

    def predict(self, x):
        """Walk down the tree to return the label of a single example."""
        if len(x) != self.num_attrs:
            raise IndexError(f"Expected a feature vector of length {self.num_attrs}, got {len(x)}")
        node = self.root
        while not node.is_leaf:
            if x[node.feature_index] == 0:
                node = node.zero_branch
            else:
                node = node.one_branch
        return int(node.label)

    def predict_many(self, X):
        return np.array([self.predict(x) for x in X], dtype=np.int64)

    @property
    def node_count(self):
        return _count_nodes(self.root)

    @property
    def depth(self):
        return _depth(self.root)


def build_tree(data, attributes, examples):
    """
    Recursively build the subtree for a set of examples.

    The feature chosen at a node is removed from the set its children see, so
    no feature is tested twice along a path. The caller's set is never modified.
    """
    if len(examples) == 0:
        # The parent must set the label on this leaf
        return LeafNode(PLACEHOLDER_LABEL)

    labels = data.train_label[examples]
    majority = majority_label(labels)

    # Stopping conditions: pure subset or no more features to split on
    if np.all(labels == majority) or not attributes:
        return LeafNode(majority)

    best_feature, _ = best_split(data.train_ex, data.train_label, examples, attributes)
    if best_feature is None:
        # None of the splits reduces the entropy
        return LeafNode(majority)

    remaining = attributes - {best_feature}
    goes_one = data.train_ex[examples, best_feature] != 0
    zero_examples = examples[~goes_one]
    one_examples = examples[goes_one]

    zero_branch = build_tree(data, remaining, zero_examples)
    one_branch = build_tree(data, remaining, one_examples)

    # Empty partitions carry no information of their own
    if len(zero_examples) == 0:
        zero_branch = LeafNode(majority)
    if len(one_examples) == 0:
        one_branch = LeafNode(majority)

    return SplitNode(best_feature, zero_branch, one_branch)


def _count_nodes(node):
    if node.is_leaf:
        return 1
    return 1 + _count_nodes(node.zero_branch) + _count_nodes(node.one_branch)


def _depth(node):
    if node.is_leaf:
        return 0
    return 1 + max(_depth(node.zero_branch), _depth(node.one_branch))
