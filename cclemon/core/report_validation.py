from __future__ import annotations

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cclemon.core import config

logger = logging.getLogger(__name__)


class Side(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class Action(str, Enum):
    CHARGE = "charge"
    GUN = "gun"
    GUARD = "guard"


_WINNER_BY_SENTINEL = {
    config.LEFT_WINNER_SENTINEL: Side.LEFT,
    config.RIGHT_WINNER_SENTINEL: Side.RIGHT,
}


class ReportLoadError(ValueError):
    """Raised when a report file cannot be read, decoded or validated."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        self.message = message
        super().__init__(f"{source} could not be loaded: {message}")

    @classmethod
    def from_pydantic(cls, source: str, exc: ValidationError) -> "ReportLoadError":
        # Fields are normalized before validation, so only the top-level shape can fail.
        return cls(source, "; ".join(error["msg"] for error in exc.errors()))

    @classmethod
    def from_exception(cls, source: str, exc: Exception) -> "ReportLoadError":
        if isinstance(exc, json.JSONDecodeError):
            message = f"invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})"
        elif isinstance(exc, UnicodeDecodeError):
            message = "file is not valid UTF-8 text."
        elif isinstance(exc, OSError) and exc.strerror:
            message = exc.strerror
        else:
            message = str(exc) or exc.__class__.__name__
        return cls(source, message)


def parse_action(value: Any) -> Action | None:
    """Return the matching Action, or None for anything that is not an exact action name."""
    if isinstance(value, Action):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Action(value)
    except ValueError:
        return None


def parse_winner(value: Any) -> Side | None:
    if isinstance(value, Side):
        return value
    if not isinstance(value, str):
        return None
    return _WINNER_BY_SENTINEL.get(value)


class _SchemaModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class ReportRound(_SchemaModel):
    left_choice: Action | None = Field(default=None, alias="leftChoice")
    right_choice: Action | None = Field(default=None, alias="rightChoice")

    @field_validator("left_choice", "right_choice", mode="before")
    @classmethod
    def _recognized_action_or_none(cls, value: Any) -> Action | None:
        return parse_action(value)

    def choice_for(self, side: Side) -> Action | None:
        if side is Side.LEFT:
            return self.left_choice
        return self.right_choice


class Report(_SchemaModel):
    winner: Side | None = None
    history: tuple[ReportRound, ...] = ()

    @field_validator("winner", mode="before")
    @classmethod
    def _winner_from_sentinel(cls, value: Any) -> Side | None:
        return parse_winner(value)

    @field_validator("history", mode="before")
    @classmethod
    def _history_as_rounds(cls, value: Any) -> list[Any]:
        # Entries that are not objects still count as played rounds.
        if not isinstance(value, (list, tuple)):
            return []
        return [item if isinstance(item, (dict, ReportRound)) else {} for item in value]


def _read_json(path: str) -> Any:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReportLoadError.from_exception(path, exc) from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ReportLoadError.from_exception(path, exc) from exc


def validate_report_payload(payload: Any, *, source: str = "report.json") -> Report:
    """Validate one decoded report document.

    Only the top level is enforced (it must be a JSON object). Unknown
    winners, missing history and unrecognized choices are normalized to
    ``None`` or empty values instead of failing.
    """
    try:
        return Report.model_validate(payload)
    except ValidationError as exc:
        raise ReportLoadError.from_pydantic(source, exc) from exc


def load_report(path: str) -> Report:
    payload = _read_json(path)
    report = validate_report_payload(payload, source=path)
    logger.debug(
        "Loaded report %s (winner=%s, rounds=%d)",
        path,
        report.winner.value if report.winner is not None else None,
        len(report.history),
    )
    return report


def load_reports(paths: Iterable[str]) -> list[Report]:
    """Load reports in input order, stopping at the first unreadable file."""
    return [load_report(os.path.abspath(path)) for path in paths]
