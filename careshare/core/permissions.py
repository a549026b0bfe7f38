"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
"""

from careshare.db.models import Role, Volunteer

REVIEWER_ROLES = frozenset({Role.ADMIN, Role.SUPER_ADMIN})
ROLE_RANK = {Role.VOLUNTEER: 0, Role.PARENT: 0, Role.ADMIN: 1, Role.SUPER_ADMIN: 2}


def can_review_shifts(user: Volunteer) -> bool:
    return user.role in REVIEWER_ROLES


def can_approve_volunteers(user: Volunteer) -> bool:
    return user.role in REVIEWER_ROLES


def can_view_reports(user: Volunteer) -> bool:
    return user.role in REVIEWER_ROLES


def can_manage_centers(user: Volunteer) -> bool:
    return user.role == Role.SUPER_ADMIN


def can_manage_roles(user: Volunteer) -> bool:
    return user.role == Role.SUPER_ADMIN


def can_manage_dependents(user: Volunteer) -> bool:
    return user.role == Role.PARENT


def can_act_for(user: Volunteer, volunteer: Volunteer) -> bool:
    """
    A volunteer acts for themselves; a guardian also acts for the dependents
    whose record they manage.
    """
    return user.id == volunteer.id or volunteer.managed_by == user.id


def outranks(user: Volunteer, volunteer: Volunteer) -> bool:
    """Admins manage volunteers and parents; only a super admin manages admins."""
    return ROLE_RANK[Role(user.role)] > ROLE_RANK[Role(volunteer.role)]
