class LeafNode:
    is_leaf = True

    def __init__(self, label):
        self.label = label                        # Class predicted for every example reaching the leaf

    def __repr__(self):
        return f"LeafNode(label={self.label})"


class SplitNode:
    is_leaf = False

    def __init__(self, feature_index, zero_branch, one_branch):
        self.feature_index = feature_index        # Binary feature tested at this node
        self.zero_branch = zero_branch            # Subtree for feature value 0
        self.one_branch = one_branch              # Subtree for feature value 1

    def __repr__(self):
        return f"SplitNode(feature_index={self.feature_index}, " \
               f"zero_branch={self.zero_branch!r}, one_branch={self.one_branch!r})"
