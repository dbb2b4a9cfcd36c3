"""Shared constants for tagsteps."""

from __future__ import annotations

# Instance statuses
STATUS_DRAFT = "draft"
STATUS_READY = "ready"
STATUS_IN_PROGRESS = "in_progress"
STATUS_ACTIVE = "active"
STATUS_DEACTIVATE = "deactivate"
STATUS_DEACTIVATING = "deactivating"
STATUS_REPROVISION = "reprovision"
STATUS_COMPLETE = "complete"

# Transition names
READY_TO_INPROGRESS = "ready_to_inprogress"
DEACTIVATING_TO_COMPLETE = "deactivating_to_complete"
DEACTIVATE_TO_DEACTIVATING = "deactivate_to_deactivating"
COMPLETE_TO_READY = "complete_to_ready"
ACTIVE_TO_COMPLETE = "active_to_complete"
ACTIVE_TO_DRAFT = "active_to_draft"
DRAFT_TO_READY = "draft_to_ready"
IN_PROGRESS_TO_DEACTIVATE = "in_progress_to_deactivate"
COMPLETE_TO_REPROVISION = "complete_to_reprovision"

# name -> (allowed source statuses, target status)
DEFAULT_TRANSITIONS: dict[str, tuple[frozenset[str], str]] = {
    READY_TO_INPROGRESS: (frozenset({STATUS_READY}), STATUS_IN_PROGRESS),
    DEACTIVATING_TO_COMPLETE: (frozenset({STATUS_DEACTIVATING}), STATUS_COMPLETE),
    DEACTIVATE_TO_DEACTIVATING: (frozenset({STATUS_DEACTIVATE}), STATUS_DEACTIVATING),
    # the scan process also leaves "reprovision" through this transition
    COMPLETE_TO_READY: (
        frozenset({STATUS_COMPLETE, STATUS_REPROVISION}),
        STATUS_READY,
    ),
    ACTIVE_TO_COMPLETE: (frozenset({STATUS_ACTIVE}), STATUS_COMPLETE),
    ACTIVE_TO_DRAFT: (frozenset({STATUS_ACTIVE}), STATUS_DRAFT),
    DRAFT_TO_READY: (frozenset({STATUS_DRAFT}), STATUS_READY),
    IN_PROGRESS_TO_DEACTIVATE: (frozenset({STATUS_IN_PROGRESS}), STATUS_DEACTIVATE),
    COMPLETE_TO_REPROVISION: (frozenset({STATUS_COMPLETE}), STATUS_REPROVISION),
}

# Element layout defaults
CHANNEL_STATUS_TABLE = 240
CHANNEL_MATCH_COLUMN = 248
MONITOR_UPDATE_PARAMETER = 356
SCAN_CHANNELS_TABLE = 1310
SCAN_TITLE_COLUMN_INDEX = 13
SCAN_REQUEST_PARAMETER = 3

# Polling
DEFAULT_RETRY_DELAY = 3.0
DEFAULT_SCANNER_TIMEOUT = 300.0

SCAN_NAME_FORMAT = "{scan_name} {manifest_name} #RES|BAND#"
