"""Exceptions and warnings raised by the k-means engine."""


class EmptyClusterError(RuntimeError):
    """Raised when a centroid has no assigned points during an update."""

    def __init__(self, cluster_id: int):
        self.cluster_id = cluster_id
        super().__init__(f"Cluster {cluster_id} has no assigned points; its mean is undefined")


class EmptyClusterWarning(RuntimeWarning):
    """Emitted when an empty cluster keeps its previous centroid."""
