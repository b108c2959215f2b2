"""
Domain layer - pure, Django-unaware, table-driven state machine for posts.
Decides whether a review action or a remedial-action transition is legal
and computes the resulting status fields.

Never raises for unknown input: every refusal is returned as a
TransitionResult so callers can map it to a response directly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ReviewStatus(str, Enum):
    RECEIVED = "RECEIVED"
    IN_REVIEW = "IN_REVIEW"
    NEED_INFO = "NEED_INFO"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ActionStatus(str, Enum):
    NONE = "NONE"
    REQUIRED = "REQUIRED"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    REOPENED = "REOPENED"


class ReviewAction(str, Enum):
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    REQUEST_MORE = "REQUEST_MORE"
    MARK_URGENT = "MARK_URGENT"
    ASSIGN = "ASSIGN"
    CLOSE = "CLOSE"


class ActionTransition(str, Enum):
    ASSIGN = "ASSIGN"
    START = "START"
    COMPLETE = "COMPLETE"
    REOPEN = "REOPEN"


class UserRole(str, Enum):
    WORKER = "WORKER"
    SITE_ADMIN = "SITE_ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"
    SYSTEM = "SYSTEM"


class TransitionErrorKind(str, Enum):
    AUTHORIZATION = "AUTHORIZATION"
    STATE_VIOLATION = "STATE_VIOLATION"


@dataclass(frozen=True)
class TransitionResult:
    valid: bool
    new_review_status: Optional[ReviewStatus] = None
    new_action_status: Optional[ActionStatus] = None
    error: Optional[str] = None
    error_kind: Optional[TransitionErrorKind] = None


# --- 1. Transition Tables ---

# Review action -> review statuses it may start from
REVIEW_TRANSITIONS = {
    ReviewAction.APPROVE: frozenset(
        {ReviewStatus.RECEIVED, ReviewStatus.IN_REVIEW, ReviewStatus.NEED_INFO}
    ),
    ReviewAction.REJECT: frozenset(
        {ReviewStatus.RECEIVED, ReviewStatus.IN_REVIEW, ReviewStatus.NEED_INFO}
    ),
    ReviewAction.REQUEST_MORE: frozenset(
        {ReviewStatus.RECEIVED, ReviewStatus.IN_REVIEW}
    ),
    ReviewAction.MARK_URGENT: frozenset(
        {ReviewStatus.RECEIVED, ReviewStatus.IN_REVIEW, ReviewStatus.NEED_INFO}
    ),
    # APPROVED is a legal source for ASSIGN (follow-up owner after approval)
    ReviewAction.ASSIGN: frozenset(
        {ReviewStatus.RECEIVED, ReviewStatus.IN_REVIEW, ReviewStatus.APPROVED}
    ),
    ReviewAction.CLOSE: frozenset(
        {ReviewStatus.IN_REVIEW, ReviewStatus.APPROVED}
    ),
}

# Action transition -> (allowed source statuses, target status)
ACTION_TRANSITIONS = {
    ActionTransition.ASSIGN: (
        frozenset(
            {ActionStatus.NONE, ActionStatus.REQUIRED, ActionStatus.REOPENED}
        ),
        ActionStatus.ASSIGNED,
    ),
    ActionTransition.START: (
        frozenset({ActionStatus.ASSIGNED, ActionStatus.REOPENED}),
        ActionStatus.IN_PROGRESS,
    ),
    ActionTransition.COMPLETE: (
        frozenset({ActionStatus.IN_PROGRESS}),
        ActionStatus.DONE,
    ),
    ActionTransition.REOPEN: (
        frozenset({ActionStatus.DONE}),
        ActionStatus.REOPENED,
    ),
}

ADMIN_ONLY_ACTIONS = frozenset(ReviewAction)

TERMINAL_REVIEW_STATUSES = frozenset(
    {ReviewStatus.APPROVED, ReviewStatus.REJECTED}
)
RESUBMITTABLE_REVIEW_STATUSES = frozenset(
    {ReviewStatus.NEED_INFO, ReviewStatus.REJECTED}
)


def _coerce(enum_cls, value):
    """Returns the enum member for value, or None if it is not one."""
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        return None


def _label(value) -> str:
    if isinstance(value, Enum):
        return value.value
    return str(value)


# --- 2. Review Transitions ---


def _determine_new_statuses(action, current_action_status):
    """Maps a legal review action to (new review status, new action status).
    A None action status means 'leave unchanged'."""
    if action == ReviewAction.APPROVE:
        if current_action_status == ActionStatus.NONE:
            return ReviewStatus.APPROVED, ActionStatus.DONE
        return ReviewStatus.APPROVED, None
    if action == ReviewAction.REJECT:
        return ReviewStatus.REJECTED, None
    if action == ReviewAction.REQUEST_MORE:
        return ReviewStatus.NEED_INFO, None
    if action == ReviewAction.MARK_URGENT:
        return ReviewStatus.IN_REVIEW, None
    if action == ReviewAction.ASSIGN:
        return ReviewStatus.IN_REVIEW, ActionStatus.ASSIGNED
    # CLOSE
    return ReviewStatus.APPROVED, ActionStatus.DONE


def validate_review_transition(
    action, current_review_status, current_action_status, user_role
) -> TransitionResult:
    """
    Validates an admin review action against a post's current statuses.

    Order of checks: role gate, action recognition, source-state check.
    Workers are refused every review action regardless of status.
    """
    known_action = _coerce(ReviewAction, action)
    role = _coerce(UserRole, user_role)

    if known_action in ADMIN_ONLY_ACTIONS and role == UserRole.WORKER:
        return TransitionResult(
            valid=False,
            error=(
                f"Permission denied. Only admins can perform the "
                f"'{known_action.value}' action."
            ),
            error_kind=TransitionErrorKind.AUTHORIZATION,
        )

    if known_action is None:
        return TransitionResult(
            valid=False,
            error=f"Unknown review action: '{_label(action)}'.",
            error_kind=TransitionErrorKind.STATE_VIOLATION,
        )

    review_status = _coerce(ReviewStatus, current_review_status)
    if review_status not in REVIEW_TRANSITIONS[known_action]:
        return TransitionResult(
            valid=False,
            error=(
                f"Cannot perform '{known_action.value}' while the post is in"
                f" status '{_label(current_review_status)}'."
            ),
            error_kind=TransitionErrorKind.STATE_VIOLATION,
        )

    new_review_status, new_action_status = _determine_new_statuses(
        known_action, _coerce(ActionStatus, current_action_status)
    )
    return TransitionResult(
        valid=True,
        new_review_status=new_review_status,
        new_action_status=new_action_status,
    )


# --- 3. Action Transitions ---


def validate_action_transition(
    action_type, current_action_status
) -> TransitionResult:
    """
    Validates a remedial-action lifecycle step.
    No role gate here: callers decide who may drive the action.
    """
    transition = _coerce(ActionTransition, action_type)
    if transition is None:
        return TransitionResult(
            valid=False,
            error=f"Unknown action transition: '{_label(action_type)}'.",
            error_kind=TransitionErrorKind.STATE_VIOLATION,
        )

    allowed_from, target = ACTION_TRANSITIONS[transition]
    if _coerce(ActionStatus, current_action_status) not in allowed_from:
        return TransitionResult(
            valid=False,
            error=(
                f"Cannot perform '{transition.value}' while the action is in"
                f" status '{_label(current_action_status)}'."
            ),
            error_kind=TransitionErrorKind.STATE_VIOLATION,
        )

    return TransitionResult(valid=True, new_action_status=target)


# --- 4. Predicates ---


def can_resubmit(review_status) -> bool:
    status = _coerce(ReviewStatus, review_status)
    return status in RESUBMITTABLE_REVIEW_STATUSES


def is_terminal_review_status(status) -> bool:
    return _coerce(ReviewStatus, status) in TERMINAL_REVIEW_STATUSES


def is_terminal_action_status(status) -> bool:
    return _coerce(ActionStatus, status) == ActionStatus.DONE


# --- 5. Available Transitions (for UI hints) ---


def get_available_review_actions(
    current_review_status, current_action_status, user_role
) -> list:
    """
    Lists the review actions that would validate for this post and role,
    in declaration order, as {"action", "name"} dicts.
    """
    available = []
    for action in ReviewAction:
        result = validate_review_transition(
            action, current_review_status, current_action_status, user_role
        )
        if result.valid:
            available.append(
                {
                    "action": action.value,
                    "name": action.value.replace("_", " ").title(),
                }
            )
    return available


def get_available_action_transitions(current_action_status) -> list:
    """Lists the action transitions legal from the current action status."""
    return [
        transition.value
        for transition in ActionTransition
        if validate_action_transition(transition, current_action_status).valid
    ]
