from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

from cclemon.analysis.aggregation import Aggregate
from cclemon.core import config
from cclemon.core.report_validation import Action, Side


def round_half_up(value: float, decimals: int = config.WEIGHT_DECIMALS) -> float:
    """Round the exact binary value of ``value``, sending ties away from zero.

    ``round()`` rounds ties to even, so ``round(0.125, 2)`` is 0.12 where
    fixed-point formatting gives 0.13.
    """
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def usage_ratios(counts: Mapping[str, int]) -> dict[str, float]:
    total = sum(counts.get(name, 0) for name in config.ACTION_NAMES) or 1
    return {name: counts.get(name, 0) / total for name in config.ACTION_NAMES}


def apply_floors(
    usage: Mapping[str, float],
    floors: Mapping[str, float] = config.WEIGHT_FLOORS,
) -> dict[str, float]:
    return {name: max(floors[name], usage[name]) for name in config.ACTION_NAMES}


def normalize_weights(
    weights: Mapping[str, float],
    *,
    decimals: int = config.WEIGHT_DECIMALS,
) -> dict[str, float]:
    total = sum(weights[name] for name in config.ACTION_NAMES)
    return {
        name: round_half_up(weights[name] / total, decimals)
        for name in config.ACTION_NAMES
    }


def suggest_weights(aggregate: Aggregate, side: Side = Side.LEFT) -> dict[str, float]:
    """Suggest CPU action weights mirroring one side's observed usage.

    Usage ratios are floored (charge and gun at 0.2, guard at 0.15) so no
    action is ever dropped, then renormalized and rounded to two decimals.
    The command line only asks for the LEFT side.
    """
    counts = {action.value: aggregate.actions[side][action] for action in Action}
    return normalize_weights(apply_floors(usage_ratios(counts)))
