"""Coverage Bounded Context - Coverage Engine.

Samples a GeoArea on a regular (n+1) x (n+1) grid, selects the best serving
tower at every grid point and reduces the points into CoverageStatistics.

Grid layout:
    lat_step = (NE.lat - SW.lat) / n, lng_step likewise
    point (i, j) = (SW.lat + i*lat_step, SW.lng + j*lng_step), i, j in [0, n]
    output order is row-major over (i, j); flat index k = i*(n+1) + j

Execution:
    The flat index space is split into contiguous chunks. Chunks run in the
    caller's thread, or on any concurrent.futures.Executor. Points are written
    back by absolute index and partial statistics are merged exactly, so the
    result is identical for every chunk size and worker count.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Callable, Sequence
from concurrent.futures import Executor, Future, as_completed

from domain.coverage.aggregation import CoverageAccumulator
from domain.coverage.errors import (
    InvalidAreaError,
    InvalidGridResolutionError,
    InvalidPropagationInputError,
    InvalidTowerError,
    SimulationAbortedError,
    SimulationCancelledError,
)
from domain.coverage.progress import (
    DEFAULT_PROGRESS_EVERY,
    CancellationToken,
    ProgressCallback,
    ProgressReporter,
)
from domain.coverage.propagation import signal_strength, to_bars
from domain.coverage.value_objects import (
    CoveragePoint,
    CoverageResult,
    SimulationParameters,
    Tower,
)
from domain.geodesy.services import haversine_distance
from domain.geodesy.value_objects import GeoArea

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_CHUNK_SIZE = 2048  # grid points per work unit


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
def validate_grid_resolution(grid_resolution: object) -> int:
    """Return grid_resolution as int, or raise InvalidGridResolutionError.

    Booleans and floats are rejected even when integral-valued.
    """
    if isinstance(grid_resolution, bool) or not isinstance(
        grid_resolution, numbers.Integral
    ):
        raise InvalidGridResolutionError(grid_resolution)
    if grid_resolution <= 0:
        raise InvalidGridResolutionError(grid_resolution)
    return int(grid_resolution)


def validate_inputs(
    area: GeoArea,
    towers: Sequence[Tower],
    params: SimulationParameters,
    grid_resolution: object,
) -> int:
    """Fail-fast checks run before any grid point is computed.

    Returns:
        The validated grid resolution

    Raises:
        InvalidAreaError: Non-positive latitude or longitude span
        InvalidGridResolutionError: Resolution not a positive integer
        InvalidTowerError: Tower parameters that cannot drive the model
        InvalidPropagationInputError: Non-negative or non-finite sensitivity
    """
    if not area.is_well_ordered():
        raise InvalidAreaError(area)

    n = validate_grid_resolution(grid_resolution)

    for tower in towers:
        tp = tower.parameters
        if not (math.isfinite(tp.frequency) and tp.frequency > 0):
            raise InvalidTowerError(tower.id, f"invalid frequency {tp.frequency}")
        if not math.isfinite(tp.reference_power):
            raise InvalidTowerError(
                tower.id, f"invalid reference power {tp.reference_power}"
            )

    if not (
        math.isfinite(params.receiver_sensitivity) and params.receiver_sensitivity < 0
    ):
        raise InvalidPropagationInputError(
            f"receiver_sensitivity must be negative and finite, "
            f"got {params.receiver_sensitivity}"
        )

    return n


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------
def grid_axes(area: GeoArea, grid_resolution: int) -> tuple[list[float], list[float]]:
    """Latitudes (index i) and longitudes (index j) of the sampling grid."""
    n = validate_grid_resolution(grid_resolution)
    sw = area.south_west
    lat_step = area.lat_span / n
    lng_step = area.lng_span / n
    latitudes = [sw.latitude + i * lat_step for i in range(n + 1)]
    longitudes = [sw.longitude + j * lng_step for j in range(n + 1)]
    return latitudes, longitudes


# ---------------------------------------------------------------------------
# Best Server
# ---------------------------------------------------------------------------
def evaluate_point(
    latitude: float,
    longitude: float,
    towers: Sequence[Tower],
    receiver_sensitivity: float,
    path_loss_exponent: float | None = None,
) -> CoveragePoint:
    """Select the best serving tower at one location.

    Towers are scanned in the given order and replaced only on a strictly
    greater signal, so the first tower wins ties.

    Args:
        latitude, longitude: Receiver location in degrees
        towers: Ordered candidate towers
        receiver_sensitivity: Bar threshold in dBm
        path_loss_exponent: Environment exponent applied to every tower.
            None uses each tower's own exponent.

    Returns:
        CoveragePoint; with no towers the signal is -inf and bars are 0.
    """
    max_signal = -math.inf
    best_tower: Tower | None = None
    best_distance = 0.0

    for tower in towers:
        tp = tower.parameters
        distance = haversine_distance(
            latitude, longitude, tower.location.latitude, tower.location.longitude
        )
        strength = signal_strength(
            distance,
            tp.reference_power,
            tp.path_loss_exponent if path_loss_exponent is None else path_loss_exponent,
            tp.frequency,
            tp.transmitter_power,
            tp.antenna_gain,
        )
        if strength > max_signal:
            max_signal = strength
            best_tower = tower
            best_distance = distance

    return CoveragePoint(
        latitude=latitude,
        longitude=longitude,
        signal_strength=max_signal,
        signal_bars=to_bars(max_signal, receiver_sensitivity),
        network=best_tower.network if best_tower is not None else "",
        serving_tower=best_tower.id if best_tower is not None else None,
        distance=best_distance,
    )


# ---------------------------------------------------------------------------
# Chunk Evaluation
# ---------------------------------------------------------------------------
def _evaluate_chunk(
    start: int,
    stop: int,
    area: GeoArea,
    towers: Sequence[Tower],
    params: SimulationParameters,
    grid_resolution: int,
    on_point: Callable[[], None] | None = None,
) -> tuple[int, list[CoveragePoint], CoverageAccumulator]:
    """Evaluate flat indices [start, stop) and reduce them.

    Module-level so it can be shipped to process pools.
    """
    latitudes, longitudes = grid_axes(area, grid_resolution)
    side = len(longitudes)

    points: list[CoveragePoint] = []
    for k in range(start, stop):
        i, j = divmod(k, side)
        point = evaluate_point(
            latitudes[i],
            longitudes[j],
            towers,
            params.receiver_sensitivity,
            params.path_loss_exponent,
        )
        points.append(point)
        if on_point is not None:
            on_point()

    return start, points, CoverageAccumulator.from_points(points)


def _chunk_bounds(total: int, chunk_size: int) -> list[tuple[int, int]]:
    return [(s, min(s + chunk_size, total)) for s in range(0, total, chunk_size)]


# ---------------------------------------------------------------------------
# Main Service: generate_coverage_data
# ---------------------------------------------------------------------------
def generate_coverage_data(
    area: GeoArea,
    towers: Sequence[Tower],
    params: SimulationParameters,
    grid_resolution: int | None = None,
    on_progress: ProgressCallback | None = None,
    *,
    executor: Executor | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    cancel_token: CancellationToken | None = None,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
) -> CoverageResult:
    """Simulate coverage of ``towers`` over ``area``.

    Args:
        area: Simulation area; NE must be strictly north-east of SW
        towers: Ordered towers to consider (caller filters by status)
        params: Environment profile (exponent, sensitivity)
        grid_resolution: Subdivisions per axis; None uses
            params.grid_resolution. The grid has (n+1)^2 points.
        on_progress: Optional observer of ProgressEvents
        executor: Optional executor to evaluate chunks in parallel
        chunk_size: Grid points per work unit
        cancel_token: Optional token checked between chunks
        progress_every: Points between progress events

    Returns:
        CoverageResult with row-major points and statistics

    Raises:
        InvalidAreaError, InvalidGridResolutionError, InvalidTowerError:
            Before any computation
        SimulationCancelledError: If cancel_token was set mid-run
        SimulationAbortedError: On any arithmetic fault during the scan

    Example:
        >>> area = GeoArea.from_bounds(south=0, west=0, north=1, east=1)
        >>> result = generate_coverage_data(area, towers, SimulationParameters(), 10)
        >>> print(f"{result.statistics.overall_coverage:.1f}% covered")
    """
    n = validate_inputs(
        area,
        towers,
        params,
        params.grid_resolution if grid_resolution is None else grid_resolution,
    )
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    towers = tuple(towers)
    total = (n + 1) ** 2
    if not towers:
        logger.warning(
            "Coverage simulation with no towers: all %d points uncovered", total
        )
    logger.info(
        "Coverage simulation: %d towers, resolution %d, %d points",
        len(towers),
        n,
        total,
    )

    reporter = ProgressReporter(total, on_progress, every=progress_every)
    bounds = _chunk_bounds(total, chunk_size)

    try:
        if executor is None:
            chunks = _run_sequential(
                area, towers, params, n, bounds, reporter, cancel_token
            )
        else:
            chunks = _run_parallel(
                executor, area, towers, params, n, bounds, reporter, cancel_token
            )
    except SimulationCancelledError:
        raise
    except (InvalidPropagationInputError, ArithmeticError, ValueError) as e:
        logger.error("Coverage simulation aborted: %s", e)
        raise SimulationAbortedError(f"Arithmetic fault during scan: {e}") from e

    points: list[CoveragePoint | None] = [None] * total
    accumulator = CoverageAccumulator()
    for start, chunk_points, partial in sorted(chunks, key=lambda c: c[0]):
        points[start : start + len(chunk_points)] = chunk_points
        accumulator = accumulator.merge(partial)

    statistics = accumulator.to_statistics(area)
    logger.info(
        "Coverage simulation complete: %.1f%% covered, %.1f%% strong",
        statistics.overall_coverage,
        statistics.strong_coverage,
    )
    return CoverageResult(
        points=tuple(points),  # type: ignore[arg-type]
        statistics=statistics,
        grid_resolution=n,
    )


def _check_cancelled(
    cancel_token: CancellationToken | None, reporter: ProgressReporter
) -> None:
    if cancel_token is not None and cancel_token.cancelled:
        logger.info(
            "Coverage simulation cancelled at %d/%d points",
            reporter.processed,
            reporter.total,
        )
        raise SimulationCancelledError(reporter.processed, reporter.total)


def _run_sequential(
    area: GeoArea,
    towers: tuple[Tower, ...],
    params: SimulationParameters,
    grid_resolution: int,
    bounds: list[tuple[int, int]],
    reporter: ProgressReporter,
    cancel_token: CancellationToken | None,
) -> list[tuple[int, list[CoveragePoint], CoverageAccumulator]]:
    chunks = []
    for start, stop in bounds:
        _check_cancelled(cancel_token, reporter)
        chunks.append(
            _evaluate_chunk(
                start, stop, area, towers, params, grid_resolution, reporter.tick
            )
        )
        logger.debug("Evaluated points %d-%d", start, stop - 1)
    return chunks


def _run_parallel(
    executor: Executor,
    area: GeoArea,
    towers: tuple[Tower, ...],
    params: SimulationParameters,
    grid_resolution: int,
    bounds: list[tuple[int, int]],
    reporter: ProgressReporter,
    cancel_token: CancellationToken | None,
) -> list[tuple[int, list[CoveragePoint], CoverageAccumulator]]:
    _check_cancelled(cancel_token, reporter)
    futures: list[Future] = [
        executor.submit(
            _evaluate_chunk, start, stop, area, towers, params, grid_resolution
        )
        for start, stop in bounds
    ]

    chunks = []
    try:
        for future in as_completed(futures):
            chunk = future.result()
            chunks.append(chunk)
            reporter.advance(len(chunk[1]))
            logger.debug("Chunk at %d finished (%d points)", chunk[0], len(chunk[1]))
            if len(chunks) < len(futures):
                _check_cancelled(cancel_token, reporter)
    except BaseException:
        for future in futures:
            future.cancel()
        raise
    return chunks
