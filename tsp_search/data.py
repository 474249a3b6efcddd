from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import numpy as np
import tsplib95

from .logs import get_logger
from .solvers.base import tour_cost
from .solvers.distance import DistanceMatrix


logger = get_logger(__name__)


class DataFormatError(ValueError):
    """Raised when a TSPLIB file cannot be turned into a coordinate list."""


@dataclass
class Instance:
    name: str
    path: Path
    coords: np.ndarray
    optimum: Optional[int] = None

    @property
    def dimension(self) -> int:
        return int(self.coords.shape[0])

    def distance_matrix(self) -> DistanceMatrix:
        return DistanceMatrix(self.coords)


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _read_dimension(path: Path) -> Optional[int]:
    try:
        with path.open("r") as f:
            for line in f:
                if "DIMENSION" in line.upper():
                    parts = line.replace(":", " ").split()
                    for token in parts:
                        if token.isdigit():
                            return int(token)
    except (OSError, UnicodeDecodeError):
        # left for load_instance to report
        return None
    return None


def _load_optimum(path: Path, matrix: DistanceMatrix) -> Optional[int]:
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        try:
            tour_file = tsplib95.parse(candidate.read_text())
            nodes = [node - 1 for node in tour_file.tours[0]]
        except Exception as e:
            logger.warning(f"skipping unreadable tour file {candidate}: {e}")
            continue
        if sorted(nodes) != list(range(len(matrix))):
            logger.warning(f"skipping tour file {candidate}: not a tour over {len(matrix)} cities")
            continue
        return tour_cost(matrix, nodes)
    return None


def load_instance(path: Path) -> Instance:
    """
    Read a TSPLIB file with a NODE_COORD_SECTION into an :class:`Instance`.

    Coordinates are ordered by node id and re-indexed from 0. A sibling
    ``.opt.tour`` file, when present, provides the known optimum.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No such TSPLIB file: {path}")
    try:
        problem = tsplib95.load(str(path))
    except Exception as e:
        raise DataFormatError(f"{path}: cannot parse TSPLIB data ({e})") from e

    node_coords = problem.node_coords
    if not node_coords:
        raise DataFormatError(f"{path}: no NODE_COORD_SECTION found")
    dimension = problem.dimension
    if dimension != len(node_coords):
        raise DataFormatError(
            f"{path}: DIMENSION is {dimension} but {len(node_coords)} coordinate records were read"
        )
    try:
        coords = np.array([node_coords[node][:2] for node in sorted(node_coords)], dtype=float)
    except (TypeError, ValueError) as e:
        raise DataFormatError(f"{path}: malformed coordinate record ({e})") from e
    if coords.ndim != 2 or coords.shape[1] != 2:
        raise DataFormatError(f"{path}: expected two coordinates per node")

    instance = Instance(name=problem.name or path.stem, path=path, coords=coords)
    instance.optimum = _load_optimum(path, instance.distance_matrix())
    return instance


def load_tsplib_instances(
    root: Path, max_nodes: Optional[int] = None, max_instances: Optional[int] = None
) -> List[Instance]:
    tsp_files = sorted(Path(root).glob("*.tsp"))
    instances: List[Instance] = []
    for p in tsp_files:
        if max_nodes is not None:
            dim = _read_dimension(p)
            if dim is not None and dim > max_nodes:
                continue
        instances.append(load_instance(p))
        if max_instances is not None and len(instances) >= max_instances:
            break
    return instances
