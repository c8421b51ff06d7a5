"""Export state machine."""

from dataclasses import dataclass, replace
from enum import Enum


class ExportState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    GENERATING_STRUCTURE = "generating_structure"
    GENERATING_CODE = "generating_code"
    COPYING_RESOURCES = "copying_resources"
    OPTIMIZING = "optimizing"
    VALIDATING_OUTPUT = "validating_output"
    PACKAGING = "packaging"
    COMPLETED = "completed"
    FAILED = "failed"


PROGRESS: dict[ExportState, int] = {
    ExportState.IDLE: 0,
    ExportState.VALIDATING: 10,
    ExportState.GENERATING_STRUCTURE: 20,
    ExportState.GENERATING_CODE: 50,
    ExportState.COPYING_RESOURCES: 70,
    ExportState.OPTIMIZING: 80,
    ExportState.VALIDATING_OUTPUT: 90,
    ExportState.PACKAGING: 95,
    ExportState.COMPLETED: 100,
    ExportState.FAILED: 0,
}

# Forward order; OPTIMIZING and PACKAGING may be skipped
ORDER = [
    ExportState.IDLE,
    ExportState.VALIDATING,
    ExportState.GENERATING_STRUCTURE,
    ExportState.GENERATING_CODE,
    ExportState.COPYING_RESOURCES,
    ExportState.OPTIMIZING,
    ExportState.VALIDATING_OUTPUT,
    ExportState.PACKAGING,
    ExportState.COMPLETED,
]
OPTIONAL_STATES = frozenset({ExportState.OPTIMIZING, ExportState.PACKAGING})


def can_transition(current: ExportState, target: ExportState) -> bool:
    """
    Whether ``target`` may follow ``current``.

    FAILED is reachable from any non-terminal state. Otherwise the target
    must come later in the order, skipping only optional states.
    """
    if current in (ExportState.COMPLETED, ExportState.FAILED):
        return False
    if target == ExportState.FAILED:
        return True
    if target not in ORDER:
        return False

    start, end = ORDER.index(current), ORDER.index(target)
    if end <= start:
        return False
    return all(state in OPTIONAL_STATES for state in ORDER[start + 1:end])


@dataclass(frozen=True)
class ExportProgress:
    state: ExportState = ExportState.IDLE
    progress: int = 0
    current_task: str = ""
    processed_pages: int = 0
    total_pages: int = 0

    def with_task(self, task: str, processed_pages: int | None = None) -> "ExportProgress":
        processed = self.processed_pages if processed_pages is None else processed_pages
        return replace(self, current_task=task, processed_pages=processed)

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "progress": self.progress,
            "current_task": self.current_task,
            "processed_pages": self.processed_pages,
            "total_pages": self.total_pages,
        }


__all__ = ["ExportState", "PROGRESS", "ORDER", "can_transition", "ExportProgress"]
