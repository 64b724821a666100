"""
Cosine similarity helpers.

Vectors of different length, and zero-norm vectors, score 0.0 rather than
raising or producing NaN.
"""

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as sk_cosine_similarity


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """
    Compute cosine similarity between two embeddings.

    Args:
        a: First vector
        b: Second vector

    Returns:
        dot(a, b) / (|a| * |b|), or 0.0 if lengths differ or either norm is zero
    """
    if len(a) != len(b) or len(a) == 0:
        return 0.0

    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)
    norm = np.linalg.norm(vec_a) * np.linalg.norm(vec_b)
    if norm == 0:
        return 0.0
    return float(np.dot(vec_a, vec_b) / norm)


def batch_cosine_similarity(query: list[float], embeddings: list[list[float]]) -> list[float]:
    """
    Score many embeddings against one query.

    Embeddings whose length matches the query are scored in one matrix
    operation; mismatched ones score 0.0.

    Args:
        query: Query vector
        embeddings: Candidate vectors

    Returns:
        Scores in the same order as `embeddings`
    """
    scores = [0.0] * len(embeddings)
    if not query:
        return scores

    matching = [i for i, emb in enumerate(embeddings) if len(emb) == len(query)]
    if not matching:
        return scores

    query_vec = np.asarray(query, dtype=np.float64).reshape(1, -1)
    matrix = np.asarray([embeddings[i] for i in matching], dtype=np.float64)

    # sklearn normalizes zero vectors to zero, so they score 0.0
    similarities = sk_cosine_similarity(query_vec, matrix)[0]
    for position, index in enumerate(matching):
        scores[index] = float(similarities[position])
    return scores
