"""
Application layer - Django-aware orchestrator service for remedial actions.
Role checks live here; the Domain (posts.workflows) only validates the
lifecycle step. Every transition writes the owning post's action_status.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from notifications.models import Notification
from notifications.services import notify
from posts.models import Post
from posts.workflows import (
    ActionStatus,
    ActionTransition,
    get_available_action_transitions,
    validate_action_transition,
)
from sites.services import is_site_admin, get_admin_sites_filter

from .models import Action

User = get_user_model()

logger = logging.getLogger(__name__)

# Steps an assignee may take on their own action
ASSIGNEE_TRANSITIONS = (
    ActionTransition.START.value,
    ActionTransition.COMPLETE.value,
)


class ActionTransitionError(Exception):
    """Custom exception for invalid action state transitions."""

    pass


class ActionPermissionError(Exception):
    """Custom exception for permission failures on actions."""

    pass


# --- HELPER FUNCTIONS ---


def _append_to_notes(action: Action, user: User, note_prefix: str, content):
    """
    Prepends a timestamped entry to the action's completion_note log, e.g.
    [2025-11-14 09:30 - 01012345678 - COMPLETED]:
    Guard rail re-installed.
    """
    timestamp = timezone.now().strftime("%Y-%m-%d %H:%M")
    new_note = (
        f"[{timestamp} - {user.phone} - {note_prefix}]:\n"
        f"{content}\n"
        f"{'-' * 20}\n"
    )
    action.completion_note = new_note + action.completion_note


def _apply_transition(post: Post, transition: ActionTransition, user: User):
    """Validates a lifecycle step and writes the new status to the post."""
    result = validate_action_transition(transition, post.action_status)
    if not result.valid:
        logger.warning(
            "Refused %s on action of post %s by user %s: %s",
            transition.value,
            post.pk,
            user.pk,
            result.error,
        )
        raise ActionTransitionError(result.error)

    from_status = post.action_status
    post.action_status = result.new_action_status.value
    post.save(update_fields=["action_status", "updated_at"])
    logger.info(
        "Post %s action: %s by user %s, %s -> %s",
        post.pk,
        transition.value,
        user.pk,
        from_status,
        post.action_status,
    )


def _lock(action: Action):
    """Re-reads the action and its post under row locks."""
    locked = Action.objects.select_for_update().get(pk=action.pk)
    locked.post = (
        Post.objects.select_for_update()
        .select_related("site")
        .get(pk=locked.post_id)
    )
    return locked


def _require_assignee_or_admin(action: Action, user: User, verb: str):
    is_assignee = (
        action.assignee_id is not None and action.assignee_id == user.id
    )
    if not (is_assignee or is_site_admin(user, action.post.site)):
        raise ActionPermissionError(
            f"Only the assignee or a site admin can {verb} this action."
        )


def get_action_visibility_filter(user) -> Q:
    """Assignees see their own actions; admins see their sites' actions."""
    if user.is_global_admin:
        return Q()
    return Q(assignee=user) | get_admin_sites_filter(
        user, prefix="post__site"
    )


def get_action_context(action: Action, user: User) -> dict:
    """Transitions this user could drive right now, for the detail view."""
    available = get_available_action_transitions(action.status)
    if not is_site_admin(user, action.post.site):
        if action.assignee_id != user.id:
            return {"available_transitions": []}
        available = [t for t in available if t in ASSIGNEE_TRANSITIONS]
    return {"available_transitions": available}


# --- WORKFLOW ACTIONS ---


@transaction.atomic
def assign_action(
    *, post: Post, user: User, assignee: User = None, due_date=None
) -> Action:
    """
    Creates (or re-targets) the post's remedial action and moves the
    action status to ASSIGNED.
    Permission: site admin only.

    A post already ASSIGNED (e.g. by the ASSIGN review action) is
    re-targeted without a status change.
    """
    post = Post.objects.select_for_update().select_related("site").get(
        pk=post.pk
    )
    if not is_site_admin(user, post.site):
        raise ActionPermissionError("Only site admins can assign actions.")

    if post.action_status != ActionStatus.ASSIGNED.value:
        _apply_transition(post, ActionTransition.ASSIGN, user)

    action, created = Action.objects.get_or_create(
        post=post, defaults={"created_by": user}
    )
    action.assignee = assignee
    action.due_date = due_date
    action.completed_at = None
    action.save(
        update_fields=["assignee", "due_date", "completed_at", "updated_at"]
    )

    if assignee is not None:
        notify(
            recipient=assignee,
            entity_type=Notification.EntityType.ACTION,
            entity_id=action.pk,
            event_type=Notification.EventType.ACTION_ASSIGNED,
            message="A remedial action was assigned to you.",
            triggered_by=user,
        )
    return action


@transaction.atomic
def start_action(*, action: Action, user: User) -> Action:
    """
    Moves an action from ASSIGNED or REOPENED to IN_PROGRESS.
    Permission: the assignee or a site admin.
    """
    action = _lock(action)
    _require_assignee_or_admin(action, user, "start")
    _apply_transition(action.post, ActionTransition.START, user)
    return action


@transaction.atomic
def complete_action(
    *, action: Action, user: User, completion_note: str
) -> Action:
    """
    Moves an action from IN_PROGRESS to DONE.
    Permission: the assignee or a site admin.
    """
    action = _lock(action)
    _require_assignee_or_admin(action, user, "complete")
    _apply_transition(action.post, ActionTransition.COMPLETE, user)

    action.completed_at = timezone.now()
    _append_to_notes(action, user, "COMPLETED", completion_note)
    action.save(
        update_fields=["completed_at", "completion_note", "updated_at"]
    )
    return action


def close_action(*, action: Action, user: User, note: str) -> Action:
    """
    Stamps an action that a review (CLOSE, or APPROVE) finished without
    going through COMPLETE. The caller holds the action and post row locks
    and has already written DONE to the post.
    """
    action.completed_at = timezone.now()
    _append_to_notes(action, user, "CLOSED", note)
    action.save(
        update_fields=["completed_at", "completion_note", "updated_at"]
    )
    logger.info(
        "Action %s of post %s closed by user %s",
        action.pk,
        action.post_id,
        user.pk,
    )
    return action


@transaction.atomic
def reopen_action(*, action: Action, user: User, reason: str) -> Action:
    """
    Moves an action from DONE back to REOPENED.
    Permission: site admin only.
    """
    action = _lock(action)
    # Check permission FIRST - only admins reopen
    if not is_site_admin(user, action.post.site):
        raise ActionPermissionError("Only site admins can reopen actions.")

    _apply_transition(action.post, ActionTransition.REOPEN, user)

    action.completed_at = None
    _append_to_notes(action, user, "REASON FOR REOPENING", reason)
    action.save(
        update_fields=["completed_at", "completion_note", "updated_at"]
    )

    if action.assignee is not None:
        notify(
            recipient=action.assignee,
            entity_type=Notification.EntityType.ACTION,
            entity_id=action.pk,
            event_type=Notification.EventType.ACTION_REOPENED,
            message=reason,
            triggered_by=user,
        )
    return action
