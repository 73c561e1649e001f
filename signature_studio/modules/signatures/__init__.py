"""Signature HTML rendering."""

from .models import CustomStyle, SignatureFields
from .presets import CUSTOM_PRESET, PRESETS, StylePreset, custom_preset, preset_names
from .renderer import SignatureRenderer, render_signature

__all__ = [
    "CUSTOM_PRESET",
    "PRESETS",
    "CustomStyle",
    "SignatureFields",
    "SignatureRenderer",
    "StylePreset",
    "custom_preset",
    "preset_names",
    "render_signature",
]
