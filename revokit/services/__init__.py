"""Revocation services: cache, validation and rotation."""

from __future__ import annotations

from .revocation.service import RevocationCache
from .rotation.service import RotationCoordinator
from .validation.service import Validator, check_well_formed

__all__ = ["RevocationCache", "RotationCoordinator", "Validator", "check_well_formed"]
