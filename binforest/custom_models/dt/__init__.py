from binforest.custom_models.dt.node import LeafNode, SplitNode
from binforest.custom_models.dt.tree import DecisionTree, build_tree

__all__ = ['LeafNode', 'SplitNode', 'DecisionTree', 'build_tree']
