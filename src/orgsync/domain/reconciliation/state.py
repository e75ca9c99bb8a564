"""Phase gate shared by the reconcilers of one run."""

from __future__ import annotations

from enum import StrEnum

from orgsync.domain.errors import PreconditionError


class SyncPhase(StrEnum):
    """Whether team reconciliation has completed in the current run.

    The transition ``TEAMS_PENDING -> TEAMS_SYNCED`` happens once, after the team
    reconciler returns, and is terminal for the run.
    """

    TEAMS_PENDING = "teams-pending"
    TEAMS_SYNCED = "teams-synced"


def require_teams_synced(phase: SyncPhase, operation: str) -> None:
    """Fail fast when ``operation`` runs before teams are synchronized."""

    if phase is not SyncPhase.TEAMS_SYNCED:
        raise PreconditionError(f"[sync/{operation}] organization teams are not synced")
