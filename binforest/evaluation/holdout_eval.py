import logging
import os
import numpy as np
import pandas as pd
from binforest.args import ClassifierType
from binforest.classifier import get_classifier, set_extra_clf_params
from binforest.evaluation import prepare_holdout_data


logger = logging.getLogger(__name__)


def perform_holdout_evaluation(args):
    """Train the classifier on the first examples and report its performance on the held-out ones.
    """
    train_data, (cross_ex, cross_label) = prepare_holdout_data(args)
    resdir = getattr(args, 'resdir', None)

    extra_params = set_extra_clf_params(
        args.classifier_type,
        forest_size=args.forest_size,
        bag_examples=args.bag_examples,
        workers=args.workers
    )
    classifier = get_classifier(
        args.classifier_type,
        accuracy_metric=args.accuracy_metric,
        seed=args.global_seed,
        **extra_params
    )

    logger.info(f"Training classifier on {train_data.num_train_exs} examples")
    classifier.train(train_data)
    architecture = classifier.get_architecture()
    if args.classifier_type == ClassifierType.DecisionForest:
        logger.info(f"Forest of {architecture[0]} trees, {architecture[1]} nodes in total, "
                    f"max depth {architecture[2]}")
    else:
        logger.info(f"Tree with {architecture[0]} nodes, depth {architecture[1]}")

    result = {
        'classifier': args.classifier_type.name,
        'forest_size': args.forest_size if args.classifier_type == ClassifierType.DecisionForest else None,
        'bag_examples': args.bag_examples,
        'num_train_exs': train_data.num_train_exs,
        'num_cross_exs': len(cross_label),
        'percent_correct': None,
        'score': None,
    }
    if len(cross_label) == 0:
        logger.warning("The cross set is empty, skipping the evaluation")
    else:
        logger.info(f"Testing classifier on {len(cross_label)} examples")
        y_pred = classifier.predict(cross_ex)
        correct = int(np.sum(y_pred == cross_label))
        result['percent_correct'] = 100 * correct // len(cross_label)
        result['score'] = classifier.accuracy_f(cross_label, y_pred, **classifier.accuracy_params)
        logger.info(f"Performance on cross set: {result['percent_correct']}%")
        logger.info(f"{args.accuracy_metric.name} on cross set: {result['score']:.4f}")

    if resdir is not None:
        pd.DataFrame([result]).to_csv(os.path.join(resdir, 'holdout_results.csv'), index=False)
        if train_data.num_test_exs > 0:
            predictions = pd.DataFrame({'prediction': classifier.predict(train_data.test_ex)})
            if train_data.test_label is not None:
                predictions['label'] = train_data.test_label
            predictions.to_csv(os.path.join(resdir, 'test_predictions.csv'), index_label='example')
            logger.info(f"Predictions for {train_data.num_test_exs} test examples saved in {resdir}")

    return result
