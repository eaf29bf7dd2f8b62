"""Inverse-distance weighting.

Every node takes ``sum(w_i * z_i) / sum(w_i)`` with ``w_i = 1 / d_i ** power``.
A node that coincides with a sample (``d == 0``), or whose weight overflows to
infinity, takes that sample's ``z`` directly; with duplicate samples the first
one in input order wins.

Weights are evaluated as ``(d_min / d_i) ** power``, the same ratios scaled
so the nearest sample weighs 1.
"""
import logging
import math
import os
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence, Tuple

import numpy as np
from scipy.spatial import cKDTree

from .errors import EmptyInputError, InvalidMaxPointsError, InvalidPowerError
from .grid import Extent, GridSpec, cell_centers
from .io import Sample

logger = logging.getLogger(__name__)

DEFAULT_POWER = 2.0
# Upper bound on nodes x samples evaluated per block (float64 elements)
BLOCK_ELEMENTS = 2_000_000
_MIN_DENOMINATOR = 1.0 / sys.float_info.max


def _check(samples: Sequence[Sample], power: float):
    if len(samples) == 0:
        raise EmptyInputError('no samples to interpolate from', stage='interpolate')
    if not (math.isfinite(power) and power >= 0):
        raise InvalidPowerError(f'power must be >= 0, got {power}')


def interpolate_at(samples: Sequence[Sample], x: float, y: float, power: float = DEFAULT_POWER) -> float:
    """Value at a single location, evaluated sample by sample."""
    _check(samples, power)
    dists = []
    for s in samples:
        d = math.sqrt((s.x - x) ** 2 + (s.y - y) ** 2)
        if d == 0.0:
            return s.z
        try:
            dp = d ** power
        except OverflowError:
            dp = math.inf
        # weight would be infinite
        if dp < _MIN_DENOMINATOR:
            return s.z
        dists.append(d)

    # Scaling by the nearest distance keeps its weight at 1, so the sum
    # never collapses to zero however large the power
    dmin = min(dists)
    num = 0.0
    den = 0.0
    for s, d in zip(samples, dists):
        w = (dmin / d) ** power
        num += w * s.z
        den += w
    return num / den


def _weighted(d: np.ndarray, z: np.ndarray, power: float) -> np.ndarray:
    """Row-wise IDW given distances ``d`` (nodes x neighbours) and matching ``z``."""
    with np.errstate(divide='ignore', over='ignore', invalid='ignore'):
        exact = (d == 0.0) | np.isinf(1.0 / d ** power)
        w = (d.min(axis=1, keepdims=True) / d) ** power
        out = (w * z).sum(axis=1) / w.sum(axis=1)
    hit = exact.any(axis=1)
    if hit.any():
        rows = np.flatnonzero(hit)
        first = exact[rows].argmax(axis=1)
        out[rows] = z[rows, first] if z.ndim == 2 else z[first]
    return out


def _distances(qx, qy, sx, sy):
    dx = qx[:, None] - sx
    dy = qy[:, None] - sy
    return np.sqrt(dx * dx + dy * dy)


def _block_all(qx, qy, sx, sy, sz, power):
    return _weighted(_distances(qx, qy, sx[None, :], sy[None, :]), sz, power)


def _nearest_indices(qx, qy, tree: cKDTree, sx, sy, k):
    """Indices of the ``k`` nearest samples per node, in input order.

    Samples tied at the k-th distance are resolved towards the lowest input
    index, independent of the tree's internal ordering.
    """
    n = len(sx)
    k2 = min(n, 2 * k)
    _, idx = tree.query(np.column_stack([qx, qy]), k=k2)
    idx = idx.reshape(len(qx), k2)
    d = _distances(qx, qy, sx[idx], sy[idx])
    order = np.lexsort((idx, d), axis=1)
    idx = np.take_along_axis(idx, order, axis=1)
    d = np.take_along_axis(d, order, axis=1)

    if k2 < n:
        # the k-th distance may be shared by samples outside the candidates
        open_rows = np.flatnonzero(d[:, -1] <= d[:, k - 1] * (1 + 1e-9))
        if len(open_rows):
            full = _distances(qx[open_rows], qy[open_rows], sx[None, :], sy[None, :])
            every = np.broadcast_to(np.arange(n), full.shape)
            # positions in a full row are the sample indices themselves
            idx[open_rows] = np.lexsort((every, full), axis=1)[:, :k2]
    return np.sort(idx[:, :k], axis=1)


def _block_nearest(qx, qy, tree: cKDTree, sx, sy, sz, power, k):
    idx = _nearest_indices(qx, qy, tree, sx, sy, k)
    return _weighted(_distances(qx, qy, sx[idx], sy[idx]), sz[idx], power)


def _row_blocks(n_rows: int, n_cols: int, n_neighbours: int) -> Sequence[Tuple[int, int]]:
    rows = max(1, BLOCK_ELEMENTS // max(1, n_cols * n_neighbours))
    return [(r, min(r + rows, n_rows)) for r in range(0, n_rows, rows)]


def interpolate_grid(samples: Sequence[Sample], extent: Extent, grid: GridSpec,
                     power: float = DEFAULT_POWER, max_points: Optional[int] = None,
                     workers: Optional[int] = None) -> np.ndarray:
    """IDW value at every cell centre, as a north-up ``(y_size, x_size)`` float64 array.

    Rows are split into blocks and evaluated on a thread pool; each block
    fills its own slice of the output. ``max_points`` restricts every node to
    its nearest samples (all samples when ``None``).
    """
    _check(samples, power)
    pts = np.asarray(samples, dtype='float64').reshape(-1, 3)
    sx, sy, sz = pts[:, 0], pts[:, 1], pts[:, 2]

    if max_points is not None and int(max_points) < 1:
        raise InvalidMaxPointsError(f'max_points must be >= 1, got {max_points}')
    k = len(pts) if max_points is None else min(int(max_points), len(pts))
    tree = cKDTree(pts[:, :2]) if k < len(pts) else None

    xs, ys = cell_centers(extent, grid)
    out = np.empty((grid.y_size, grid.x_size), dtype='float64')

    def fill(block):
        r0, r1 = block
        qy, qx = np.meshgrid(ys[r0:r1], xs, indexing='ij')
        qx, qy = qx.ravel(), qy.ravel()
        if tree is None:
            vals = _block_all(qx, qy, sx, sy, sz, power)
        else:
            vals = _block_nearest(qx, qy, tree, sx, sy, sz, power, k)
        out[r0:r1] = vals.reshape(r1 - r0, grid.x_size)

    blocks = _row_blocks(grid.y_size, grid.x_size, k)
    workers = workers or min(len(blocks), os.cpu_count() or 1)
    logger.info('Interpolating %d cells from %d samples (power=%s, neighbours=%d, workers=%d)',
                grid.x_size * grid.y_size, len(pts), power, k, workers)
    if workers <= 1 or len(blocks) == 1:
        for b in blocks:
            fill(b)
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # list() re-raises the first failure from a worker
            list(pool.map(fill, blocks))
    return out
