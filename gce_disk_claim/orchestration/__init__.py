"""
GCE Disk Claim - Orchestration Module

Coordinates the claim workflow.
"""

from gce_disk_claim.orchestration.claim import (
    ClaimOrchestrator,
    ClaimResult,
    decide_action,
    ACTION_NOOP,
    ACTION_ATTACH,
    ACTION_DETACH_ATTACH,
    ACTION_REATTACH
)
from gce_disk_claim.orchestration.locator import DiskLocator
from gce_disk_claim.orchestration.state import StateTracker, StepState

__all__ = [
    'ClaimOrchestrator',
    'ClaimResult',
    'decide_action',
    'ACTION_NOOP',
    'ACTION_ATTACH',
    'ACTION_DETACH_ATTACH',
    'ACTION_REATTACH',
    'DiskLocator',
    'StateTracker',
    'StepState'
]
