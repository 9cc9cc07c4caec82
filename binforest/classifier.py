import logging
from sklearn import metrics
from binforest.args import ClassifierType, AccuracyMetric
from binforest.custom_models.dt.tree import DecisionTree
from binforest.custom_models.forest.forest import DecisionForest


logger = logging.getLogger(__name__)


def train(data, forest_size=None, seed=None, bag_examples=False, workers=1):
    """Build a single decision tree, or a forest of `forest_size` trees."""
    if forest_size is None:
        return DecisionTree(data)
    return DecisionForest(data, forest_size, seed=seed, bag_examples=bag_examples, workers=workers)


def get_classifier(classifier_type, accuracy_metric, seed=None, **extra_clf_params):
    classifiers = {
        ClassifierType.DecisionTree: DecisionTreeWrapper,
        ClassifierType.DecisionForest: DecisionForestWrapper,
    }
    try:
        classifier_class = classifiers[classifier_type]
    except KeyError:
        raise ValueError(f"Unknown classifier type: {classifier_type}")
    return classifier_class(accuracy_metric, seed, **extra_clf_params)


def set_extra_clf_params(classifier_type, forest_size=None, bag_examples=False, workers=1):
    """Set the extra parameters for the classifier class instantiation.
    """
    extra_params = {}

    if classifier_type == ClassifierType.DecisionForest:
        assert forest_size is not None, "The size of the forest must be provided for a decision forest."
        extra_params['forest_size'] = forest_size
        extra_params['bag_examples'] = bag_examples
        extra_params['workers'] = workers

    return extra_params


class _ClassifierWrapper:
    # Base class for classifier wrappers
    def __init__(self, accuracy_metric, seed=None, **extra_clf_params):
        self._clf = None
        self.seed = seed
        self.extra_clf_params = extra_clf_params
        self.set_accuracy_function(accuracy_metric)

    def set_clf(self, data):
        raise NotImplementedError

    def set_accuracy_function(self, accuracy_metric):
        self.accuracy_metric = accuracy_metric
        self.accuracy_params = {}
        if accuracy_metric == AccuracyMetric.Accuracy:
            self.accuracy_f = metrics.accuracy_score
        elif accuracy_metric == AccuracyMetric.F1:
            self.accuracy_f = metrics.f1_score
            self.accuracy_params['average'] = 'weighted'
        else:
            raise ValueError(f"Unknown accuracy metric: {accuracy_metric}")

    @property
    def model(self):
        return self._clf

    def train(self, data, x_test=None, y_test=None):
        self.set_clf(data)
        if x_test is None or y_test is None:
            return
        return self.test(x_test, y_test)

    def predict(self, X):
        if self._clf is None:
            raise RuntimeError(f"{self.__class__.__name__} must be trained before predicting")
        return self._clf.predict_many(X)

    def test(self, x_test, y_test):
        y_pred = self.predict(x_test)
        accuracy = self.accuracy_f(y_test, y_pred, **self.accuracy_params)
        return accuracy

    def get_architecture(self, *args, **kwargs):
        raise NotImplementedError


class DecisionTreeWrapper(_ClassifierWrapper):
    def set_clf(self, data):
        self._clf = DecisionTree(data, **self.extra_clf_params)

    def get_architecture(self):
        return self._clf.node_count, self._clf.depth


class DecisionForestWrapper(_ClassifierWrapper):
    def set_clf(self, data):
        self._clf = DecisionForest(data, seed=self.seed, **self.extra_clf_params)

    def get_architecture(self):
        trees = self._clf.trees
        return len(trees), sum(tree.node_count for tree in trees), max(tree.depth for tree in trees)
