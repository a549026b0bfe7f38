"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
"""


class CareShareError(Exception):
    """Base exception for domain rule violations."""


class DuplicateActiveShiftError(CareShareError):
    """Raised when a volunteer checks in while a shift is already active."""

    def __init__(self, volunteer_id: int):
        self.volunteer_id = volunteer_id
        super().__init__(f"Volunteer {volunteer_id} already has an active shift")


class ShiftNotFoundError(CareShareError):
    """Raised when a shift does not exist or is not in the expected status."""


class VolunteerNotFoundError(CareShareError):
    pass


class CenterNotFoundError(CareShareError):
    pass


class InvalidTransitionError(CareShareError):
    """Raised when a shift status change is not part of the lifecycle."""


class PermissionDeniedError(CareShareError):
    """Raised when the caller's role does not grant the requested capability."""


class StoreUnavailableError(CareShareError):
    """Raised when the backing database cannot be reached."""


class StoreConflictError(CareShareError):
    """Raised when a write violates a uniqueness constraint."""


class MonitorAlreadyRunningError(CareShareError):
    """Raised when a position monitor is started twice without being stopped."""
