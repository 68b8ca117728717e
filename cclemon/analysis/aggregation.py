from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from cclemon.core.report_validation import Action, Report, Side

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Aggregate:
    total_rounds: int
    wins: Mapping[Side, int]
    actions: Mapping[Side, Mapping[Action, int]]

    def action_counts(self, side: Side) -> dict[str, int]:
        return {action.value: self.actions[side][action] for action in Action}

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalRounds": self.total_rounds,
            "wins": {side.value: self.wins[side] for side in Side},
            "actions": {side.value: self.action_counts(side) for side in Side},
        }


def _freeze(
    total_rounds: int,
    wins: Counter[Side],
    actions: Mapping[Side, Counter[Action]],
) -> Aggregate:
    return Aggregate(
        total_rounds=total_rounds,
        wins=MappingProxyType({side: wins[side] for side in Side}),
        actions=MappingProxyType(
            {
                side: MappingProxyType({action: actions[side][action] for action in Action})
                for side in Side
            }
        ),
    )


def aggregate_reports(reports: Iterable[Report]) -> Aggregate:
    """Fold reports into total rounds, wins per side and action usage per side."""
    total_rounds = 0
    report_count = 0
    skipped_choices = 0
    wins: Counter[Side] = Counter()
    actions: dict[Side, Counter[Action]] = {side: Counter() for side in Side}

    for report in reports:
        report_count += 1
        if report.winner is not None:
            wins[report.winner] += 1
        for round_ in report.history:
            total_rounds += 1
            for side in Side:
                choice = round_.choice_for(side)
                if choice is None:
                    skipped_choices += 1
                    continue
                actions[side][choice] += 1

    logger.debug(
        "Aggregated %d report(s): rounds=%d, left_wins=%d, right_wins=%d",
        report_count,
        total_rounds,
        wins[Side.LEFT],
        wins[Side.RIGHT],
    )
    if skipped_choices:
        logger.debug("Skipped %d missing or unrecognized choice(s)", skipped_choices)
    return _freeze(total_rounds, wins, actions)
