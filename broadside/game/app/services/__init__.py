"""Application service-layer helpers."""

from broadside.game.app.services.placement_editor import PlacementDraft

__all__ = ["PlacementDraft"]
