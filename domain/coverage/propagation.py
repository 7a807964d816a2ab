"""Coverage Bounded Context - Propagation Model.

Log-distance path loss bounded by free-space path loss, plus the mapping of
received power to a 0-5 bar rating. Pure functions, no dependency on the grid.

signal_strength() is the hot inner loop of a simulation: it runs
towers x (grid_resolution + 1)^2 times, so validation here is limited to
cheap finiteness and sign checks.
"""

from __future__ import annotations

import math

from domain.coverage.errors import InvalidPropagationInputError

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
# FSPL constant for distance in meters and frequency in MHz
FSPL_CONSTANT_DB = 27.55

# (normalized threshold, bars), checked in descending order, first match wins
BAR_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (0.8, 5),
    (0.6, 4),
    (0.4, 3),
    (0.2, 2),
)


# ---------------------------------------------------------------------------
# Free-Space Path Loss
# ---------------------------------------------------------------------------
def free_space_path_loss(distance: float, frequency: float) -> float:
    """Free-space path loss in dB.

    FSPL = 20*log10(d) + 20*log10(f) - 27.55, with d in meters and f in MHz.

    Raises:
        InvalidPropagationInputError: If distance or frequency is not a
            positive finite number
    """
    if not (math.isfinite(distance) and distance > 0):
        raise InvalidPropagationInputError(
            f"distance must be positive and finite for FSPL, got {distance}"
        )
    if not (math.isfinite(frequency) and frequency > 0):
        raise InvalidPropagationInputError(
            f"frequency must be positive and finite, got {frequency}"
        )
    return _fspl(distance, frequency)


def _fspl(distance: float, frequency: float) -> float:
    # Unchecked; callers guarantee distance > 0 and frequency > 0
    return 20 * math.log10(distance) + 20 * math.log10(frequency) - FSPL_CONSTANT_DB


# ---------------------------------------------------------------------------
# Received Signal Strength
# ---------------------------------------------------------------------------
def signal_strength(
    distance: float,
    reference_power: float,
    path_loss_exponent: float,
    frequency: float,
    transmitter_power: float | None = None,
    antenna_gain: float | None = None,
) -> float:
    """Estimate received power in dBm at a given distance from a transmitter.

    P(d) = P0 - 10*n*log10(d + 1), floored at -FSPL(d, f) so the estimate
    never reports more attenuation than unobstructed free space.

    Args:
        distance: Distance to the transmitter in meters (>= 0)
        reference_power: P0, received power at unit distance in dBm
        path_loss_exponent: n, environment-dependent attenuation rate
        frequency: Carrier frequency in MHz (> 0)
        transmitter_power: Accepted for interface completeness; not used
        antenna_gain: Accepted for interface completeness; not used

    Returns:
        Received power in dBm. Exactly reference_power when distance == 0.

    Raises:
        InvalidPropagationInputError: On negative/non-finite distance,
            non-positive/non-finite frequency, or non-finite P0/n
    """
    if not (math.isfinite(distance) and distance >= 0):
        raise InvalidPropagationInputError(
            f"distance must be non-negative and finite, got {distance}"
        )
    if not math.isfinite(reference_power):
        raise InvalidPropagationInputError(
            f"reference_power must be finite, got {reference_power}"
        )
    if not math.isfinite(path_loss_exponent):
        raise InvalidPropagationInputError(
            f"path_loss_exponent must be finite, got {path_loss_exponent}"
        )
    if not (math.isfinite(frequency) and frequency > 0):
        raise InvalidPropagationInputError(
            f"frequency must be positive and finite, got {frequency}"
        )

    # Co-located receiver: no attenuation
    if distance == 0:
        return reference_power

    log_distance = reference_power - 10 * path_loss_exponent * math.log10(
        distance + 1
    )
    return max(log_distance, -_fspl(distance, frequency))


# ---------------------------------------------------------------------------
# Bars
# ---------------------------------------------------------------------------
def to_bars(dbm: float, sensitivity: float) -> int:
    """Map received power to a 0-5 bar rating.

    Below sensitivity is 0 bars. Otherwise the margin above sensitivity is
    normalized by |sensitivity| and bucketed at 0.8/0.6/0.4/0.2
    (thresholds inclusive). Exactly at sensitivity gives 1 bar.

    Args:
        dbm: Received power in dBm (-inf allowed, yields 0)
        sensitivity: Receiver sensitivity in dBm (non-zero, finite)

    Raises:
        InvalidPropagationInputError: If sensitivity is zero or non-finite,
            or dbm is NaN
    """
    if not math.isfinite(sensitivity) or sensitivity == 0:
        raise InvalidPropagationInputError(
            f"sensitivity must be non-zero and finite, got {sensitivity}"
        )
    if math.isnan(dbm):
        raise InvalidPropagationInputError("dbm must not be NaN")

    if dbm < sensitivity:
        return 0

    normalized = (dbm - sensitivity) / abs(sensitivity)
    for threshold, bars in BAR_THRESHOLDS:
        if normalized >= threshold:
            return bars
    return 1
