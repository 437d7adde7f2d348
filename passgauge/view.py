"""
passgauge.view

render_view(): everything the window shows, computed from
(password, visibility toggle, latest result, selected backend) alone.
"""

from dataclasses import dataclass
from typing import Tuple

from .backends import BackendChoice
from .strength import EvaluationResult

VISIBILITY_TOOLTIP = "Toggle password visibility"


@dataclass(frozen=True)
class PasswordView:
    masked: bool
    visibility_icon: str
    visibility_action: str
    visibility_tooltip: str
    visibility_enabled: bool
    progress_percent: int
    strength_label: str
    timing_label: str
    backend_labels: Tuple[str, ...]
    selected_index: int


def timing_label(result: EvaluationResult) -> str:
    return f"Calculation time: {result.calculation_time_ms} ms"


def render_view(password: str, show_password: bool, result: EvaluationResult,
                backend: BackendChoice) -> PasswordView:
    choices = list(BackendChoice)
    return PasswordView(
        masked=not show_password,
        visibility_icon="visibility" if show_password else "visibility_off",
        visibility_action="Hide" if show_password else "Show",
        visibility_tooltip=VISIBILITY_TOOLTIP,
        visibility_enabled=bool(password),
        progress_percent=int(round(result.strength.progress * 100)),
        strength_label=result.strength.label,
        timing_label=timing_label(result),
        backend_labels=tuple(c.label for c in choices),
        selected_index=choices.index(backend),
    )
