"""Kernel services shared by every module."""

from erp_kernel.services.sequence_service import SequenceService

__all__ = ["SequenceService"]
