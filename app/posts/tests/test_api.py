"""
Test suite for posts API.
"""

from django.test import TestCase, override_settings
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework.test import APIClient
from rest_framework import status

from notifications.models import Notification
from points.models import PointsLedger
from posts.models import Post, Review
from sites.models import Site, SiteMembership


# Helper function to create users
def create_user(phone, role=None, **extra):
    if role is not None:
        extra["role"] = role
    return get_user_model().objects.create_user(
        phone=phone, password="tstpw123", **extra
    )


def add_member(user, site, role=SiteMembership.Role.WORKER):
    return SiteMembership.objects.create(
        user=user,
        site=site,
        role=role,
        status=SiteMembership.Status.ACTIVE,
    )


# Helper function for URLs
def post_list_url():
    return reverse("posts:post-list")


def post_detail_url(post_id):
    return reverse("posts:post-detail", args=[post_id])


def post_action_url(post_id, action):
    return reverse(f"posts:post-{action}", args=[post_id])


class PostTestBase(TestCase):
    """Base test class with common setup for all post tests."""

    def setUp(self):
        self.client = APIClient()

        # --- create sites ---
        self.site = Site.objects.create(name="Tower A", join_code="TOWERA")
        self.other_site = Site.objects.create(
            name="Tower B", join_code="TOWERB"
        )

        # --- create users ---
        self.worker = create_user("01011110001", name="Kim Worker")
        self.coworker = create_user("01011110002", name="Lee Coworker")
        self.site_admin = create_user("01011110003", name="Park Admin")
        self.super_admin = create_user(
            "01011110004", role=get_user_model().Role.SUPER_ADMIN
        )
        self.outsider = create_user("01011110005")

        add_member(self.worker, self.site)
        add_member(self.coworker, self.site)
        add_member(self.site_admin, self.site, SiteMembership.Role.SITE_ADMIN)
        add_member(self.outsider, self.other_site)

        # --- create test posts ---
        self.post = Post.objects.create(
            site=self.site,
            created_by=self.worker,
            category=Post.Category.HAZARD,
            content="Guard rail missing on floor 3",
        )
        self.private_post = Post.objects.create(
            site=self.site,
            created_by=self.coworker,
            category=Post.Category.UNSAFE_BEHAVIOR,
            content="No harness on scaffold",
            visibility=Post.Visibility.ADMIN_ONLY,
        )
        self.other_site_post = Post.objects.create(
            site=self.other_site,
            created_by=self.outsider,
            category=Post.Category.SUGGESTION,
            content="More lighting near gate",
        )

    def review(self, user, post, action, **extra):
        self.client.force_authenticate(user=user)
        payload = {"action": action, **extra}
        return self.client.post(post_action_url(post.id, "review"), payload)


class PostQuerysetTests(PostTestBase):
    """Test data segregation and queryset filtering."""

    def test_worker_sees_own_and_public_posts(self):
        """Test a worker does not see another worker's admin-only post."""
        self.client.force_authenticate(user=self.worker)
        res = self.client.get(post_list_url())

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        ids = [p["id"] for p in res.data["results"]]
        self.assertEqual(ids, [self.post.id])

    def test_author_sees_own_admin_only_post(self):
        self.client.force_authenticate(user=self.coworker)
        res = self.client.get(post_list_url())

        ids = {p["id"] for p in res.data["results"]}
        self.assertEqual(ids, {self.post.id, self.private_post.id})

    def test_site_admin_sees_all_posts_of_their_site(self):
        self.client.force_authenticate(user=self.site_admin)
        res = self.client.get(post_list_url())

        ids = {p["id"] for p in res.data["results"]}
        self.assertEqual(ids, {self.post.id, self.private_post.id})

    def test_super_admin_sees_every_site(self):
        self.client.force_authenticate(user=self.super_admin)
        res = self.client.get(post_list_url())

        self.assertEqual(len(res.data["results"]), 3)

    def test_other_site_post_not_found(self):
        """Test posts of other sites are hidden (404, not 403)."""
        self.client.force_authenticate(user=self.worker)
        res = self.client.get(post_detail_url(self.other_site_post.id))

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_filter_by_review_status(self):
        self.post.review_status = "APPROVED"
        self.post.save()
        self.client.force_authenticate(user=self.site_admin)
        res = self.client.get(post_list_url(), {"review_status": "RECEIVED"})

        ids = [p["id"] for p in res.data["results"]]
        self.assertEqual(ids, [self.private_post.id])

    def test_filter_created_by_me(self):
        self.client.force_authenticate(user=self.coworker)
        res = self.client.get(post_list_url(), {"created_by": "me"})

        ids = [p["id"] for p in res.data["results"]]
        self.assertEqual(ids, [self.private_post.id])

    def test_anonymous_post_hides_author(self):
        self.post.is_anonymous = True
        self.post.save()
        self.client.force_authenticate(user=self.coworker)
        res = self.client.get(post_list_url())

        entry = next(p for p in res.data["results"] if p["id"] == self.post.id)
        self.assertIsNone(entry["created_by"])

    def test_anonymous_post_not_matched_by_author_filter(self):
        """Test filtering by author id does not reveal anonymous posts."""
        self.post.is_anonymous = True
        self.post.save()
        self.client.force_authenticate(user=self.coworker)
        res = self.client.get(post_list_url(), {"created_by": self.worker.id})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        ids = [p["id"] for p in res.data["results"]]
        self.assertNotIn(self.post.id, ids)

        self.client.force_authenticate(user=self.worker)
        res = self.client.get(post_list_url(), {"created_by": self.worker.id})
        ids = [p["id"] for p in res.data["results"]]
        self.assertIn(self.post.id, ids)

    def test_unauthenticated_access_fails(self):
        """Test that unauthenticated requests are rejected."""
        res = self.client.get(post_list_url())

        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)


class PostCreateTests(PostTestBase):
    """Test creating posts."""

    def test_create_post_as_member(self):
        """Test a member creates a post at RECEIVED / NONE."""
        self.client.force_authenticate(user=self.worker)
        payload = {
            "site": self.site.id,
            "category": Post.Category.HAZARD,
            "content": "Loose cable at entrance",
            "location_floor": "B1",
        }
        res = self.client.post(post_list_url(), payload)

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        post = Post.objects.get(id=res.data["id"])
        self.assertEqual(post.created_by, self.worker)
        self.assertEqual(post.review_status, "RECEIVED")
        self.assertEqual(post.action_status, "NONE")
        self.assertFalse(post.is_urgent)

    def test_status_fields_in_payload_are_ignored(self):
        self.client.force_authenticate(user=self.worker)
        payload = {
            "site": self.site.id,
            "category": Post.Category.HAZARD,
            "content": "Trying to self-approve",
            "review_status": "APPROVED",
            "action_status": "DONE",
        }
        res = self.client.post(post_list_url(), payload)

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        post = Post.objects.get(id=res.data["id"])
        self.assertEqual(post.review_status, "RECEIVED")
        self.assertEqual(post.action_status, "NONE")

    def test_create_post_at_other_site_fails(self):
        self.client.force_authenticate(user=self.worker)
        payload = {
            "site": self.other_site.id,
            "category": Post.Category.HAZARD,
            "content": "Not my site",
        }
        res = self.client.post(post_list_url(), payload)

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertIn("error", res.data)

    def test_create_post_with_blank_content_fails(self):
        self.client.force_authenticate(user=self.worker)
        payload = {
            "site": self.site.id,
            "category": Post.Category.HAZARD,
            "content": "   ",
        }
        res = self.client.post(post_list_url(), payload)

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_pending_member_cannot_create_post(self):
        pending = create_user("01011110009")
        SiteMembership.objects.create(user=pending, site=self.site)
        self.client.force_authenticate(user=pending)
        payload = {
            "site": self.site.id,
            "category": Post.Category.HAZARD,
            "content": "Waiting for approval",
        }
        res = self.client.post(post_list_url(), payload)

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)


class PostDetailTests(PostTestBase):
    """Test the contextual fields of the detail view."""

    def test_admin_sees_available_actions(self):
        self.client.force_authenticate(user=self.site_admin)
        res = self.client.get(post_detail_url(self.post.id))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        actions = [a["action"] for a in res.data["available_actions"]]
        self.assertIn("APPROVE", actions)
        self.assertNotIn("CLOSE", actions)
        self.assertFalse(res.data["can_resubmit"])

    def test_worker_sees_no_actions(self):
        self.client.force_authenticate(user=self.worker)
        res = self.client.get(post_detail_url(self.post.id))

        self.assertEqual(res.data["available_actions"], [])

    def test_author_can_resubmit_when_info_requested(self):
        self.post.review_status = "NEED_INFO"
        self.post.save()
        self.client.force_authenticate(user=self.worker)
        res = self.client.get(post_detail_url(self.post.id))

        self.assertTrue(res.data["can_resubmit"])


class PostReviewTests(PostTestBase):
    """Test the review action endpoint."""

    def test_worker_review_is_forbidden(self):
        """Test a worker gets 403 and nothing changes."""
        res = self.review(self.coworker, self.post, "APPROVE")

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertIn("Permission denied", res.data["error"])
        self.post.refresh_from_db()
        self.assertEqual(self.post.review_status, "RECEIVED")
        self.assertFalse(Review.objects.exists())
        self.assertFalse(PointsLedger.objects.exists())

    def test_approve_awards_points_and_notifies_author(self):
        res = self.review(self.site_admin, self.post, "APPROVE")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["post_status"], "APPROVED")
        self.assertEqual(res.data["action_status"], "DONE")
        self.assertEqual(res.data["points_awarded"], 100)

        entry = PointsLedger.objects.get(post=self.post)
        self.assertEqual(entry.user, self.worker)
        self.assertEqual(entry.site, self.site)
        self.assertEqual(entry.amount, 100)
        self.assertEqual(entry.admin, self.site_admin)
        self.assertEqual(entry.reason_code, "POST_APPROVED")

        notification = Notification.objects.get(recipient=self.worker)
        self.assertEqual(notification.event_type, "POST_APPROVED")
        self.assertEqual(notification.entity_id, self.post.id)

    @override_settings(POST_APPROVAL_POINTS=30)
    def test_approval_points_follow_settings(self):
        res = self.review(self.site_admin, self.post, "APPROVE")

        self.assertEqual(res.data["points_awarded"], 30)
        self.assertEqual(PointsLedger.objects.get().amount, 30)

    def test_review_writes_log_entry(self):
        res = self.review(
            self.site_admin,
            self.post,
            "REQUEST_MORE",
            comment="Which stairwell?",
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        review = Review.objects.get(post=self.post)
        self.assertEqual(review.admin, self.site_admin)
        self.assertEqual(review.action, "REQUEST_MORE")
        self.assertEqual(review.from_review_status, "RECEIVED")
        self.assertEqual(review.to_review_status, "NEED_INFO")
        self.assertEqual(review.comment, "Which stairwell?")

    def test_reject_notifies_author(self):
        res = self.review(
            self.site_admin, self.post, "REJECT", reason_code="DUPLICATE"
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["post_status"], "REJECTED")
        self.assertEqual(res.data["points_awarded"], 0)
        self.assertTrue(
            Notification.objects.filter(
                recipient=self.worker, event_type="POST_REJECTED"
            ).exists()
        )
        self.assertFalse(PointsLedger.objects.exists())

    def test_invalid_state_is_conflict(self):
        """Test REJECT on an approved post returns 409."""
        self.post.review_status = "APPROVED"
        self.post.save()
        res = self.review(self.site_admin, self.post, "REJECT")

        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertIn("APPROVED", res.data["error"])
        self.post.refresh_from_db()
        self.assertEqual(self.post.review_status, "APPROVED")

    def test_unknown_action_is_conflict(self):
        res = self.review(self.site_admin, self.post, "ESCALATE")

        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)

    def test_lowercase_action_name_is_unknown(self):
        res = self.review(self.site_admin, self.post, "approve")

        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertIn("Unknown review action", res.data["error"])
        self.post.refresh_from_db()
        self.assertEqual(self.post.review_status, "RECEIVED")

    def test_mark_urgent_sets_flag(self):
        res = self.review(self.site_admin, self.post, "MARK_URGENT")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.post.refresh_from_db()
        self.assertTrue(self.post.is_urgent)
        self.assertEqual(self.post.review_status, "IN_REVIEW")
        self.assertEqual(self.post.action_status, "NONE")

    def test_assign_then_approve_keeps_action_assigned(self):
        res = self.review(self.site_admin, self.post, "ASSIGN")
        self.assertEqual(res.data["post_status"], "IN_REVIEW")
        self.assertEqual(res.data["action_status"], "ASSIGNED")

        res = self.review(self.site_admin, self.post, "APPROVE")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["post_status"], "APPROVED")
        self.assertEqual(res.data["action_status"], "ASSIGNED")

    def test_close_from_in_review(self):
        self.post.review_status = "IN_REVIEW"
        self.post.action_status = "IN_PROGRESS"
        self.post.save()
        res = self.review(self.super_admin, self.post, "CLOSE")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["post_status"], "APPROVED")
        self.assertEqual(res.data["action_status"], "DONE")

    def test_review_history_newest_first(self):
        self.review(self.site_admin, self.post, "MARK_URGENT")
        self.review(self.site_admin, self.post, "APPROVE")
        res = self.client.get(post_action_url(self.post.id, "reviews"))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [r["action"] for r in res.data], ["APPROVE", "MARK_URGENT"]
        )


class PostResubmitTests(PostTestBase):
    """Test the author's resubmit endpoint."""

    def test_resubmit_after_info_request(self):
        self.review(self.site_admin, self.post, "REQUEST_MORE")
        self.client.force_authenticate(user=self.worker)
        res = self.client.post(
            post_action_url(self.post.id, "resubmit"),
            {"content": "Guard rail missing, stairwell 2, floor 3"},
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.post.refresh_from_db()
        self.assertEqual(self.post.review_status, "RECEIVED")
        self.assertEqual(
            self.post.content, "Guard rail missing, stairwell 2, floor 3"
        )

    def test_resubmit_from_received_is_conflict(self):
        self.client.force_authenticate(user=self.worker)
        res = self.client.post(post_action_url(self.post.id, "resubmit"), {})

        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)

    def test_resubmit_by_non_author_is_forbidden(self):
        self.post.review_status = "REJECTED"
        self.post.save()
        self.client.force_authenticate(user=self.coworker)
        res = self.client.post(post_action_url(self.post.id, "resubmit"), {})

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.post.refresh_from_db()
        self.assertEqual(self.post.review_status, "REJECTED")
