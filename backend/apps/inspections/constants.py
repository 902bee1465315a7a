"""
Constants for inspections app.
"""

from apps.inspections.models import Inspection

Status = Inspection.Status

# Status -> statuses it may move to. Sending a report back for rework returns it to draft.
VALID_TRANSITIONS: dict[str, frozenset[str]] = {
    Status.DRAFT: frozenset({Status.DRAFT, Status.SUBMITTED}),
    Status.SUBMITTED: frozenset({Status.APPROVED, Status.REJECTED, Status.DRAFT}),
    Status.APPROVED: frozenset(),
    Status.REJECTED: frozenset({Status.SUBMITTED, Status.DRAFT}),
}

# Statuses an inspection may be created with
INITIAL_STATUSES = frozenset({Status.DRAFT, Status.SUBMITTED})

# Only supervisors move a report into these
REVIEW_STATUSES = frozenset({Status.APPROVED, Status.REJECTED})
