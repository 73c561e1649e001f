"""Render signature fields to inline-styled HTML."""

from __future__ import annotations

import logging
from typing import Optional

from jinja2 import Environment, PackageLoader, StrictUndefined

from .models import CustomStyle, SignatureFields
from .presets import CUSTOM_PRESET, PRESETS, StylePreset, custom_preset

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "signature.html.j2"


def _build_environment(autoescape: bool) -> Environment:
    return Environment(
        loader=PackageLoader("signature_studio.modules.signatures", "templates"),
        autoescape=autoescape,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
        undefined=StrictUndefined,
    )


class SignatureRenderer:
    """Maps signature fields plus a preset name to an HTML fragment.

    Output is deterministic for identical input. With ``escape_html`` off, field values are
    interpolated verbatim, matching what stored templates were generated with; turning it on
    HTML-escapes every interpolated value while keeping the preset table untouched.
    """

    def __init__(
        self,
        *,
        escape_html: bool = False,
        default_preset: str = "modern",
        presets: Optional[dict[str, StylePreset]] = None,
    ) -> None:
        self.presets = presets if presets is not None else PRESETS
        if default_preset not in self.presets:
            raise ValueError(f"unknown default preset: {default_preset}")
        self.default_preset = default_preset
        self.escape_html = escape_html
        self._template = _build_environment(escape_html).get_template(TEMPLATE_NAME)

    def resolve_preset(self, preset_name: Optional[str], custom: Optional[CustomStyle] = None) -> StylePreset:
        if preset_name == CUSTOM_PRESET:
            return custom_preset(custom or CustomStyle())
        preset = self.presets.get(preset_name or "")
        if preset is None:
            logger.debug("Unknown preset %r, falling back to %s", preset_name, self.default_preset)
            return self.presets[self.default_preset]
        return preset

    def render(
        self,
        fields: SignatureFields,
        preset_name: Optional[str] = None,
        custom: Optional[CustomStyle] = None,
    ) -> str:
        styles = self.resolve_preset(preset_name, custom)
        return self._template.render(fields=fields, styles=styles)


_renderers: dict[bool, SignatureRenderer] = {}


def render_signature(
    fields: SignatureFields,
    preset_name: Optional[str] = None,
    custom: Optional[CustomStyle] = None,
    *,
    escape_html: bool = False,
) -> str:
    renderer = _renderers.get(escape_html)
    if renderer is None:
        renderer = _renderers[escape_html] = SignatureRenderer(escape_html=escape_html)
    return renderer.render(fields, preset_name, custom)


__all__ = ["SignatureRenderer", "render_signature"]
