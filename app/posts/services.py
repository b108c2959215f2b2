"""
Application layer - Django-aware orchestrator service for posts.
Resolves the acting role, calls the Domain for validation, handles DB
transactions, writes the review log, awards points, triggers notifications.
"""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q

from actions.models import Action
from actions.services import close_action
from notifications.models import Notification
from notifications.services import notify
from points.models import PointsLedger
from points.services import award_points
from sites.models import SiteMembership
from sites.services import (
    get_effective_role,
    has_site_access,
    get_admin_sites_filter,
)

from .models import Post, Review
from .workflows import (
    ActionStatus,
    ReviewAction,
    ReviewStatus,
    TransitionErrorKind,
    UserRole,
    can_resubmit,
    get_available_review_actions,
    validate_review_transition,
)

User = get_user_model()

logger = logging.getLogger(__name__)

DEFAULT_APPROVAL_POINTS = 100

RESUBMIT_EDITABLE_FIELDS = (
    "content",
    "category",
    "hazard_type",
    "risk_level",
    "location_floor",
    "location_zone",
    "location_detail",
)

# Review outcomes the author hears about
AUTHOR_NOTIFICATIONS = {
    ReviewAction.APPROVE: (
        Notification.EventType.POST_APPROVED,
        "Your safety report was approved.",
    ),
    ReviewAction.REJECT: (
        Notification.EventType.POST_REJECTED,
        "Your safety report was rejected.",
    ),
    ReviewAction.REQUEST_MORE: (
        Notification.EventType.POST_NEED_INFO,
        "More information was requested for your safety report.",
    ),
}


class PostPermissionError(Exception):
    """The acting user may not perform this operation on the post."""

    pass


class PostTransitionError(Exception):
    """The post's current status does not allow this operation."""

    pass


def _get_approval_points() -> int:
    return int(
        getattr(settings, "POST_APPROVAL_POINTS", DEFAULT_APPROVAL_POINTS)
    )


def _approval_credited(post: Post) -> bool:
    """Approval points are credited once per post."""
    return PointsLedger.objects.filter(
        post=post, reason_code=PointsLedger.ReasonCode.POST_APPROVED
    ).exists()


# --- VISIBILITY ---


def get_post_visibility_filter(user) -> Q:
    """
    Builds the Q object for posts a user may see.
    Admins see every post of the sites they administer; everyone sees their
    own posts and worker-public posts of the sites they are active at.
    """
    if user.is_global_admin:
        return Q()

    own = Q(created_by=user)
    admin_sites = get_admin_sites_filter(user)
    public_member_sites = Q(
        visibility=Post.Visibility.WORKER_PUBLIC,
        site__memberships__user=user,
        site__memberships__status=SiteMembership.Status.ACTIVE,
    )
    return own | admin_sites | public_member_sites


# --- CONTEXTUAL DATA SERVICE (for retrieve()) ---


def get_post_context(post: Post, user: User) -> dict:
    """
    Gathers contextual data for the PostDetailSerializer: the review actions
    this user could take right now and whether the author may resubmit.
    """
    role = get_effective_role(user, post.site)
    if role == UserRole.WORKER:
        available_actions = []
    else:
        available_actions = get_available_review_actions(
            post.review_status, post.action_status, role
        )

    return {
        "available_actions": available_actions,
        "can_resubmit": (
            post.created_by_id == user.id and can_resubmit(post.review_status)
        ),
    }


# --- CREATE, RESUBMIT ---


@transaction.atomic
def create_post(*, user: User, site, **fields) -> Post:
    """
    Creates a new post at RECEIVED / NONE.
    Permission: ACTIVE member of the site, or a global admin.
    """
    if not has_site_access(user, site):
        raise PostPermissionError("You are not an active member of this site.")

    # Status fields always start at their initial values
    fields.pop("review_status", None)
    fields.pop("action_status", None)
    fields.pop("is_urgent", None)

    post = Post.objects.create(created_by=user, site=site, **fields)
    logger.info(
        "Post %s created by user %s at site %s", post.pk, user.pk, site.pk
    )
    return post


@transaction.atomic
def resubmit_post(*, post: Post, user: User, **fields) -> Post:
    """
    Lets the author edit and resubmit a post that was sent back
    (NEED_INFO) or rejected. The post re-enters review at RECEIVED.
    """
    post = Post.objects.select_for_update().get(pk=post.pk)

    if post.created_by_id != user.id:
        raise PostPermissionError("Only the author can resubmit a post.")

    if not can_resubmit(post.review_status):
        raise PostTransitionError(
            f"A post in status '{post.review_status}' cannot be resubmitted."
        )

    update_fields = ["review_status", "updated_at"]
    for name in RESUBMIT_EDITABLE_FIELDS:
        if name in fields:
            setattr(post, name, fields[name])
            update_fields.append(name)

    post.review_status = ReviewStatus.RECEIVED.value
    post.save(update_fields=update_fields)
    logger.info("Post %s resubmitted by user %s", post.pk, user.pk)
    return post


# --- REVIEW ---


@transaction.atomic
def review_post(
    *,
    post: Post,
    user: User,
    action: str,
    comment: str = "",
    reason_code: str = "",
) -> tuple:
    """
    Applies an admin review action to a post.
    Returns (review, points_awarded).

    Raises PostPermissionError for outsiders and workers, and
    PostTransitionError when the post's status does not allow the action.
    """
    # Lock the rows so concurrent reviews of one post apply in sequence.
    # Action row first, then post row, as in the action services.
    remedial_action = (
        Action.objects.select_for_update().filter(post_id=post.pk).first()
    )
    post = Post.objects.select_for_update().get(pk=post.pk)

    if not has_site_access(user, post.site):
        raise PostPermissionError("You are not an active member of this site.")

    role = get_effective_role(user, post.site)
    result = validate_review_transition(
        action, post.review_status, post.action_status, role
    )
    if not result.valid:
        logger.warning(
            "Refused %s on post %s by user %s (%s): %s",
            action,
            post.pk,
            user.pk,
            role.value,
            result.error,
        )
        if result.error_kind == TransitionErrorKind.AUTHORIZATION:
            raise PostPermissionError(result.error)
        raise PostTransitionError(result.error)

    review_action = ReviewAction(action)
    from_status = post.review_status
    from_action_status = post.action_status

    review = Review.objects.create(
        post=post,
        admin=user,
        action=review_action.value,
        comment=comment or "",
        reason_code=reason_code or "",
        from_review_status=from_status,
        to_review_status=result.new_review_status.value,
    )

    post.review_status = result.new_review_status.value
    update_fields = ["review_status", "updated_at"]
    if result.new_action_status is not None:
        post.action_status = result.new_action_status.value
        update_fields.append("action_status")
    if review_action == ReviewAction.MARK_URGENT:
        post.is_urgent = True
        update_fields.append("is_urgent")
    post.save(update_fields=update_fields)

    if (
        result.new_action_status == ActionStatus.DONE
        and from_action_status != ActionStatus.DONE.value
        and remedial_action is not None
    ):
        close_action(
            action=remedial_action,
            user=user,
            note=comment or f"Closed by {review_action.value} review.",
        )

    points_awarded = 0
    if review_action == ReviewAction.APPROVE and not _approval_credited(post):
        points_awarded = _get_approval_points()
        award_points(
            user=post.created_by,
            site=post.site,
            amount=points_awarded,
            reason_code=PointsLedger.ReasonCode.POST_APPROVED,
            post=post,
            admin=user,
        )

    if review_action in AUTHOR_NOTIFICATIONS:
        event_type, message = AUTHOR_NOTIFICATIONS[review_action]
        notify(
            recipient=post.created_by,
            entity_type=Notification.EntityType.POST,
            entity_id=post.pk,
            event_type=event_type,
            message=message,
            triggered_by=user,
            payload={"comment": comment} if comment else None,
        )

    logger.info(
        "Post %s: %s by user %s, %s -> %s (action status %s)",
        post.pk,
        review_action.value,
        user.pk,
        from_status,
        post.review_status,
        post.action_status,
    )
    return review, points_awarded
