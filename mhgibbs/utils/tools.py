"""
Script housing some helper functions
"""

# Imports
import numpy as np


def nearest_positive_definite(A: np.ndarray, max_iter: int = 100) -> np.ndarray:
    """Find the nearest symmetric positive definite matrix to A.

    Parameters
    ----------
    A : (d, d) array
        Matrix to repair
    max_iter : int
        Maximum number of diagonal shifts tried

    Returns
    -------
    A3 : (d, d) array
        Symmetric positive definite matrix

    Raises
    ------
    np.linalg.LinAlgError
        If no positive definite matrix was found within max_iter shifts
    """
    B = (A + A.T) / 2
    _, s, V = np.linalg.svd(B)

    H = np.dot(V.T * s, V)

    A2 = (B + H) / 2
    A3 = (A2 + A2.T) / 2

    if is_positive_definite(A3):
        return A3

    spacing = np.spacing(np.linalg.norm(A))
    I = np.eye(A.shape[0])
    for k in range(1, max_iter + 1):
        mineig = np.min(np.real(np.linalg.eigvals(A3)))
        A3 += I * (-mineig * k**2 + spacing)
        if is_positive_definite(A3):
            return A3

    raise np.linalg.LinAlgError("Could not find a positive definite matrix near A.")


def is_positive_definite(A: np.ndarray) -> bool:
    """
    Check if a matrix A is positive definite by attempting Cholesky decomposition.

    Parameters
    ----------
    A : (d, d) array
        Matrix to check for positive definiteness

    Returns
    -------
    is_pd : bool
        True if A is positive definite, False otherwise
    """
    try:
        np.linalg.cholesky(A)
        return True
    except np.linalg.LinAlgError:
        return False


def saturating_add(value: int, step: int, lower: int, upper: int) -> int:
    """Add step to value, clamping the result to [lower, upper] instead of overflowing"""
    return min(max(int(value) + int(step), lower), upper)
