"""
GCE Disk Claim - Step Tracking

Tracks which steps of a claim went through.
Nothing is rolled back; this exists so a failed run can say exactly
where it stopped (e.g. detached but not re-attached).
"""

from dataclasses import dataclass, field
from typing import List, Optional
from datetime import datetime


@dataclass
class StepState:
    """
    State of a single step.
    """
    step_name: str
    instance_name: str
    success: bool
    message: str
    operation_id: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


class StateTracker:
    """
    Tracks the steps of one claim run, in order.

    Example:
        tracker = StateTracker()
        tracker.add_step("Detach Disk", "old-host", success=True,
                         message="done", operation_id="op-1")

        if tracker.succeeded("Detach Disk"):
            ...
    """

    def __init__(self):
        """Initialize empty state tracker."""
        self.steps: List[StepState] = []
        self.workflow_start_time = datetime.now()

    def add_step(self, step_name: str, instance_name: str, success: bool,
                 message: str, operation_id: str = None):
        """
        Record a step.

        Args:
            step_name: Name of the step (e.g. "Detach Disk")
            instance_name: Instance the step acted on
            success: Whether it succeeded
            message: Result message
            operation_id: GCE operation name, if one was started
        """
        self.steps.append(StepState(
            step_name=step_name,
            instance_name=instance_name,
            success=success,
            message=message,
            operation_id=operation_id
        ))

    def succeeded(self, step_name: str) -> bool:
        """True if a step with this name completed successfully."""
        return any(s.success for s in self.steps if s.step_name == step_name)

    def get_failed_steps(self) -> List[StepState]:
        """Get only failed steps."""
        return [s for s in self.steps if not s.success]

    def get_summary(self) -> str:
        """Get summary of steps."""
        total = len(self.steps)
        failed = len(self.get_failed_steps())

        duration = (datetime.now() - self.workflow_start_time).total_seconds()

        summary = f"Steps: {total - failed}/{total} succeeded"
        if failed > 0:
            summary += f", {failed} failed"
        summary += f" (took {duration:.1f}s)"

        return summary
