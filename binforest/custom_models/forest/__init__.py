from binforest.custom_models.forest.forest import DecisionForest, sample_tree_subsets

__all__ = ['DecisionForest', 'sample_tree_subsets']
