"""Core components: embeddings, LLMs, memory store, graph, chunking."""
