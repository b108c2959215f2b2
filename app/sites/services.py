"""
Application layer - membership lookups shared by all site-scoped apps.
"""

from django.db.models import Q

from posts.workflows import UserRole
from .models import Site, SiteMembership


def get_active_membership(user, site):
    """Returns the user's ACTIVE membership of the site, or None."""
    if not user or not user.is_authenticated:
        return None
    return SiteMembership.objects.filter(
        user=user, site=site, status=SiteMembership.Status.ACTIVE
    ).first()


def get_effective_role(user, site) -> UserRole:
    """
    Gets the user's workflow role for this specific site.
    Global SUPER_ADMIN / SYSTEM roles win; otherwise an ACTIVE SITE_ADMIN
    membership makes the user a SITE_ADMIN; everyone else is a WORKER.
    """
    if user.is_global_admin:
        return UserRole(user.role)

    membership = get_active_membership(user, site)
    if membership and membership.role == SiteMembership.Role.SITE_ADMIN:
        return UserRole.SITE_ADMIN
    return UserRole.WORKER


def is_site_admin(user, site) -> bool:
    return get_effective_role(user, site) != UserRole.WORKER


def has_site_access(user, site) -> bool:
    """Members and global admins may read and write within a site."""
    if user.is_global_admin:
        return True
    return get_active_membership(user, site) is not None


def get_accessible_sites(user):
    """Sites the user is an ACTIVE member of (all sites for global admins)."""
    if user.is_global_admin:
        return Site.objects.all()
    return Site.objects.filter(
        memberships__user=user,
        memberships__status=SiteMembership.Status.ACTIVE,
    ).distinct()


def get_admin_sites_filter(user, prefix="site"):
    """Q object selecting rows of sites where the user is an admin."""
    if user.is_global_admin:
        return Q()
    return Q(
        **{
            f"{prefix}__memberships__user": user,
            f"{prefix}__memberships__status": SiteMembership.Status.ACTIVE,
            f"{prefix}__memberships__role": SiteMembership.Role.SITE_ADMIN,
        }
    )
