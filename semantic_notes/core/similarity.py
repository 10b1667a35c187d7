"""Косинусное сходство векторов.

Функции:
    cosine_similarity
        Сходство в [-1, 1]; 0.0 для отсутствующих и несравнимых векторов.
"""

from typing import Optional

import numpy as np


def cosine_similarity(a: Optional[np.ndarray], b: Optional[np.ndarray]) -> float:
    """Косинусное сходство двух векторов.

    Returns:
        Значение в [-1, 1]. 0.0, если один из векторов None, формы
        различаются или норма одного из них равна нулю.

    Example:
        >>> cosine_similarity(np.array([1.0, 0.0]), np.array([0.0, 1.0]))
        0.0
    """
    if a is None or b is None:
        return 0.0

    left = np.asarray(a, dtype=np.float64).ravel()
    right = np.asarray(b, dtype=np.float64).ravel()
    if left.shape != right.shape or left.size == 0:
        return 0.0

    norm = np.linalg.norm(left) * np.linalg.norm(right)
    if norm == 0 or not np.isfinite(norm):
        return 0.0

    # Погрешность float может дать 1.0000001
    return float(np.clip(np.dot(left, right) / norm, -1.0, 1.0))
