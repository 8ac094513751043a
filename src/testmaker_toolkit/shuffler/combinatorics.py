"""
Module: shuffler.combinatorics

Purpose:
    Counting helpers for ordered selections (k-permutations).

Key Functions:
    - n_pk(n, k): Number of ordered k-subsets of n items
    - exceeds(n, k, limit): Whether n_pk(n, k) > limit, computed lazily

Dependencies:
    - math (std)

Used By:
    - shuffler.validation: Capacity calculation
    - shuffler.selection: Enumeration vs sampling decision
"""

from __future__ import annotations

import math


def n_pk(n: int, k: int) -> int:
    """
    Count ordered k-subsets of n items: n! / (n - k)!.

    Python integers are unbounded, so the exact value is returned even for
    large pools.

    Args:
        n: Number of items
        k: Selection size

    Returns:
        0 when k > n or either argument is negative, 1 when k == 0,
        otherwise n! / (n - k)!

    Example:
        >>> n_pk(5, 3)
        60
        >>> n_pk(3, 5)
        0
        >>> n_pk(0, 0)
        1
    """
    if n < 0 or k < 0 or k > n:
        return 0
    return math.perm(n, k)


def exceeds(n: int, k: int, limit: int) -> bool:
    """
    Check whether n_pk(n, k) is larger than limit.

    Multiplies factors one at a time and stops as soon as the running
    product passes limit, so huge counts are never materialized.

    Args:
        n: Number of items
        k: Selection size
        limit: Threshold to compare against

    Returns:
        True if n_pk(n, k) > limit
    """
    if n < 0 or k < 0 or k > n:
        return limit < 0
    product = 1
    for factor in range(n, n - k, -1):
        product *= factor
        if product > limit:
            return True
    return product > limit
