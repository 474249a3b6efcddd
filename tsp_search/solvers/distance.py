from typing import Sequence, Tuple, Union

import numpy as np


class DistanceMatrix:
    """
    Symmetric integer Euclidean distances between every pair of cities.

    Distances are rounded half-up, which matches the TSPLIB ``nint`` used for
    EUC_2D instances. The table is computed once and frozen afterwards.
    """

    def __init__(self, coords: Union[np.ndarray, Sequence[Tuple[float, float]]]):
        coords = np.asarray(coords, dtype=float)
        if coords.ndim != 2 or coords.shape[1] != 2:
            raise ValueError(f"coords must be shape (n, 2), got {coords.shape}")
        self.n = int(coords.shape[0])
        diff = coords[:, None, :] - coords[None, :, :]
        euclid = np.sqrt(np.sum(diff ** 2, axis=2))
        matrix = np.floor(euclid + 0.5).astype(np.int64)
        np.fill_diagonal(matrix, 0)
        matrix.setflags(write=False)
        self._matrix = matrix

    @classmethod
    def from_coordinates(cls, coords) -> "DistanceMatrix":
        return cls(coords)

    @property
    def array(self) -> np.ndarray:
        return self._matrix

    def __len__(self) -> int:
        return self.n

    def __getitem__(self, key):
        return self._matrix[key]

    def __repr__(self) -> str:
        return f"DistanceMatrix(n={self.n})"
