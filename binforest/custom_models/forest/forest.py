import logging
import numpy as np
from multiprocessing.pool import ThreadPool
from binforest.custom_models.dt.tree import DecisionTree


logger = logging.getLogger(__name__)


class DecisionForest:
    """
    Ensemble of decision trees, each trained on a random subset of the features.

    Parameters:
    - data (BinaryDataSet): Training set shared (read-only) by all trees.
    - forest_size (int): Number of trees.
    - seed (int): Seed of the per-tree random streams. Unseeded if None.
    - bag_examples (bool): Train every tree on its sampled subset of examples.
      By default the subset is drawn but every tree uses all examples.
    - workers (int): Number of threads building trees concurrently.
    """
    def __init__(self, data, forest_size, seed=None, bag_examples=False, workers=1):
        if isinstance(forest_size, bool) or not isinstance(forest_size, (int, np.integer)) or forest_size < 1:
            raise ValueError(f"Forest size must be a positive integer (received {forest_size!r})")
        if data.num_attrs < 2:
            raise ValueError(f"A forest samples between 1 and num_attrs - 1 features per tree, "
                             f"which needs at least 2 features (dataset has {data.num_attrs})")
        if data.num_train_exs < 1:
            raise ValueError("Cannot build a forest on a dataset without training examples")
        if workers < 1:
            raise ValueError(f"Number of workers must be at least 1 (received {workers})")

        self.num_attrs = data.num_attrs
        self.bag_examples = bag_examples

        # one independent stream per tree, so the result does not depend on scheduling
        tree_seeds = np.random.SeedSequence(seed).spawn(forest_size)

        def grow(tree_id):
            rng = np.random.default_rng(tree_seeds[tree_id])
            attributes, examples = sample_tree_subsets(data.num_attrs, data.num_train_exs, rng)
            logger.debug(f"Tree {tree_id}: {len(attributes)} features, {len(examples)} sampled examples")
            if bag_examples:
                return DecisionTree(data, attributes, examples)
            return DecisionTree(data, attributes)

        if workers == 1 or forest_size == 1:
            trees = [grow(tree_id) for tree_id in range(forest_size)]
        else:
            with ThreadPool(min(workers, forest_size)) as pool:
                trees = pool.map(grow, range(forest_size))
        self.trees = tuple(trees)
        logger.debug(f"Built forest of {len(self.trees)} trees")

    @property
    def forest_size(self):
        return len(self.trees)

    def vote_counts(self, x):
        """Number of trees voting for label 0 and for label 1."""
        return np.bincount([tree.predict(x) for tree in self.trees], minlength=2)

    def predict(self, x):
        """Majority vote of the trees, label 0 on ties."""
        count = self.vote_counts(x)
        return 1 if count[1] > count[0] else 0

    def predict_many(self, X):
        return np.array([self.predict(x) for x in X], dtype=np.int64)


def sample_tree_subsets(num_attrs, num_train_exs, rng):
    """
    Draw the random features and examples used to train one tree.

    The number of features is uniform in [1, num_attrs - 1] and the number of
    examples uniform in [0, num_train_exs - 1]. Both subsets are prefixes of a
    random permutation of the full index range (no replacement).
    """
    num_features = int(rng.integers(1, num_attrs))
    num_train = int(rng.integers(0, num_train_exs))
    attributes = frozenset(int(attr) for attr in rng.permutation(num_attrs)[:num_features])
    examples = rng.permutation(num_train_exs)[:num_train]
    return attributes, examples
