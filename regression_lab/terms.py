from __future__ import annotations

"""
Polynomial feature expansion: exponent tuples ("terms") and their values.

A term holds one exponent per feature. The all-zero term is never produced
because the bias plays that role.
"""

from functools import lru_cache

import numpy as np

from .errors import InvalidDimensions

Term = tuple[int, ...]


@lru_cache(maxsize=64)
def _generate(feature_count: int, max_degree: int) -> tuple[Term, ...]:
    terms: list[Term] = []

    def walk(current: Term, position: int, remaining: int):
        if position == feature_count:
            if 0 < sum(current) <= max_degree:
                terms.append(current)
            return
        for exponent in range(remaining + 1):
            walk(current + (exponent,), position + 1, remaining - exponent)

    walk((), 0, max_degree)
    return tuple(terms)


def polynomial_terms(feature_count: int, max_degree: int) -> tuple[Term, ...]:
    """
    All exponent tuples of length ``feature_count`` with total degree in
    [1, max_degree].

    Order is depth-first over feature positions with exponents ascending, so
    the same inputs always give the same sequence and weights can be paired
    with terms by position.
    """
    for value in (feature_count, max_degree):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidDimensions(
                f"feature count and degree must be integers, got {value!r}"
            )
    if feature_count < 1 or max_degree < 1:
        raise InvalidDimensions(
            f"need feature_count >= 1 and max_degree >= 1, "
            f"got feature_count={feature_count}, max_degree={max_degree}"
        )
    return _generate(int(feature_count), int(max_degree))


def term_matrix(X: np.ndarray, terms: tuple[Term, ...]) -> np.ndarray:
    """Monomial value of every term for every row of X, shape (m, len(terms))."""
    X_arr = np.asarray(X, dtype=float)
    exponents = np.asarray(terms, dtype=float)  # [terms, features]
    return np.prod(X_arr[:, None, :] ** exponents[None, :, :], axis=2)


def term_label(term: Term) -> str:
    """Readable monomial such as ``x1 * x2^2``."""
    parts = []
    for j, exponent in enumerate(term):
        if exponent == 0:
            continue
        parts.append(f"x{j + 1}" if exponent == 1 else f"x{j + 1}^{exponent}")
    return " * ".join(parts)
