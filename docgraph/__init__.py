"""docgraph: graph-based hybrid retrieval over ingested documents."""

__version__ = "0.1.0"
