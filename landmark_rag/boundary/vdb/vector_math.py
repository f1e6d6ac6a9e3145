"""
Vector validation helpers shared by the store backends.

Dependencies: numpy
System role: Dimension checks and float32 conversion
"""

from typing import Sequence

import numpy as np

from landmark_rag.core.exceptions import ConfigurationError


def as_float32(vector: Sequence[float], dimensions: int, operation: str) -> np.ndarray:
    """
    Convert a vector to a 1-D float32 array of the configured length.

    Args:
        vector: Input vector
        dimensions: Expected length
        operation: Calling operation, for the error context

    Returns:
        np.ndarray: float32 array with shape (dimensions,)

    Raises:
        ConfigurationError: If the vector length is wrong
    """
    array = np.asarray(vector, dtype=np.float32).reshape(-1)
    if array.shape[0] != dimensions:
        raise ConfigurationError(
            f"Vector has {array.shape[0]} dimensions, store expects {dimensions}",
            setting="VECTOR_STORE_DIMENSIONS",
            details={"operation": operation},
        )
    return array


def l2_normalize(matrix: np.ndarray) -> np.ndarray:
    """Row-wise L2 normalization; zero rows stay zero."""
    matrix = np.atleast_2d(matrix).astype(np.float32)
    norms = np.linalg.norm(matrix, axis=1, keepdims=True)
    norms[norms == 0] = 1.0
    return np.ascontiguousarray(matrix / norms, dtype=np.float32)
