"""Validation package."""

from assetplace.validation.validator import ProjectionRequestValidator

__all__ = ["ProjectionRequestValidator"]
