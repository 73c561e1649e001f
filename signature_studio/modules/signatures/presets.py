"""Named style presets for rendered signatures."""

from __future__ import annotations

from dataclasses import dataclass

from .models import CustomStyle

CUSTOM_PRESET = "custom"

_LOGO = "height: 80px; max-width: 200px; object-fit: contain;"
_PROMO = "max-width: 100%; height: auto; border: none;"


@dataclass(frozen=True, slots=True)
class StylePreset:
    """Inline CSS for each region of a signature."""

    container: str
    name: str
    role: str
    company: str
    contact: str
    link: str
    social: str
    logo: str = _LOGO
    promo: str = _PROMO


PRESETS: dict[str, StylePreset] = {
    "modern": StylePreset(
        container="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #1a1a1a;",
        name="font-size: 18px; font-weight: 600; color: #2563eb; margin-bottom: 4px;",
        role="font-size: 14px; color: #6b7280; margin-bottom: 2px;",
        company="font-size: 14px; color: #6b7280; margin-bottom: 8px;",
        contact="font-size: 13px; color: #374151;",
        link="color: #2563eb; text-decoration: none;",
        social="margin-top: 8px; font-size: 13px;",
    ),
    "classic": StylePreset(
        container="font-family: 'Times New Roman', serif; line-height: 1.4; color: #2c3e50;",
        name="font-size: 20px; font-weight: bold; color: #2c3e50; margin-bottom: 6px;",
        role="font-size: 15px; color: #7f8c8d; margin-bottom: 3px; font-style: italic;",
        company="font-size: 15px; color: #7f8c8d; margin-bottom: 10px;",
        contact="font-size: 14px; color: #2c3e50;",
        link="color: #c0392b; text-decoration: underline;",
        social="margin-top: 10px; font-size: 14px;",
    ),
    "creative": StylePreset(
        container=(
            "font-family: 'Arial', sans-serif; line-height: 1.5; color: #2d3748; "
            "background: linear-gradient(90deg, #f7fafc 0%, #edf2f7 100%); padding: 15px; border-radius: 8px;"
        ),
        name="font-size: 22px; font-weight: bold; color: #e53e3e; margin-bottom: 5px;",
        role="font-size: 14px; color: #805ad5; margin-bottom: 3px; font-weight: 500;",
        company="font-size: 14px; color: #38a169; margin-bottom: 8px; font-weight: 500;",
        contact="font-size: 13px; color: #2d3748;",
        link="color: #ed8936; text-decoration: none; font-weight: 500;",
        social="margin-top: 10px; font-size: 13px;",
    ),
    "minimal": StylePreset(
        container="font-family: 'Helvetica Neue', Helvetica, Arial, sans-serif; line-height: 1.4; color: #333;",
        name="font-size: 16px; font-weight: 400; color: #333; margin-bottom: 2px;",
        role="font-size: 13px; color: #666; margin-bottom: 1px;",
        company="font-size: 13px; color: #666; margin-bottom: 6px;",
        contact="font-size: 12px; color: #666;",
        link="color: #333; text-decoration: none;",
        social="margin-top: 6px; font-size: 12px;",
    ),
    "corporate": StylePreset(
        container=(
            "font-family: 'Calibri', 'Trebuchet MS', sans-serif; line-height: 1.5; color: #003366; "
            "border-left: 4px solid #0066cc; padding-left: 15px;"
        ),
        name="font-size: 19px; font-weight: bold; color: #003366; margin-bottom: 5px;",
        role="font-size: 14px; color: #0066cc; margin-bottom: 3px; font-weight: 600;",
        company="font-size: 15px; color: #003366; margin-bottom: 8px; font-weight: 500;",
        contact="font-size: 13px; color: #003366;",
        link="color: #0066cc; text-decoration: none;",
        social="margin-top: 8px; font-size: 13px;",
    ),
    "tech": StylePreset(
        container=(
            "font-family: 'Monaco', 'Menlo', 'Ubuntu Mono', monospace; line-height: 1.6; color: #0f172a; "
            "background: #f8fafc; padding: 12px; border: 1px solid #e2e8f0; border-radius: 4px;"
        ),
        name="font-size: 18px; font-weight: 600; color: #7c3aed; margin-bottom: 4px;",
        role="font-size: 14px; color: #059669; margin-bottom: 2px;",
        company="font-size: 14px; color: #dc2626; margin-bottom: 8px;",
        contact="font-size: 13px; color: #374151;",
        link="color: #2563eb; text-decoration: none;",
        social="margin-top: 8px; font-size: 13px;",
    ),
    "elegant": StylePreset(
        container=(
            "font-family: 'Georgia', serif; line-height: 1.7; color: #4a5568; background: #fefefe; "
            "padding: 20px; border: 1px solid #e2e8f0;"
        ),
        name="font-size: 24px; font-weight: 300; color: #2d3748; margin-bottom: 8px; letter-spacing: 0.5px;",
        role="font-size: 16px; color: #718096; margin-bottom: 4px; font-style: italic;",
        company="font-size: 16px; color: #718096; margin-bottom: 12px;",
        contact="font-size: 14px; color: #4a5568;",
        link="color: #805ad5; text-decoration: none;",
        social="margin-top: 12px; font-size: 14px;",
    ),
    "bold": StylePreset(
        container=(
            "font-family: 'Impact', 'Arial Black', sans-serif; line-height: 1.4; color: #1a202c; "
            "background: #fed7d7; padding: 15px; border: 3px solid #e53e3e;"
        ),
        name="font-size: 24px; font-weight: 900; color: #e53e3e; margin-bottom: 6px; text-transform: uppercase;",
        role="font-size: 16px; color: #1a202c; margin-bottom: 4px; font-weight: bold;",
        company="font-size: 16px; color: #1a202c; margin-bottom: 10px; font-weight: bold;",
        contact="font-size: 14px; color: #1a202c; font-weight: 600;",
        link="color: #e53e3e; text-decoration: none; font-weight: bold;",
        social="margin-top: 10px; font-size: 14px; font-weight: bold;",
    ),
    "compact": StylePreset(
        container="font-family: 'Arial', sans-serif; line-height: 1.3; color: #333; font-size: 12px;",
        name="font-size: 14px; font-weight: bold; color: #333; margin-bottom: 2px;",
        role="font-size: 11px; color: #666; margin-bottom: 1px;",
        company="font-size: 11px; color: #666; margin-bottom: 4px;",
        contact="font-size: 11px; color: #666;",
        link="color: #0066cc; text-decoration: none;",
        social="margin-top: 4px; font-size: 11px;",
    ),
    "signature": StylePreset(
        container="font-family: 'Brush Script MT', cursive; line-height: 1.8; color: #2c3e50;",
        name="font-size: 28px; font-weight: normal; color: #8b4513; margin-bottom: 8px;",
        role="font-size: 16px; color: #2c3e50; margin-bottom: 4px; font-family: 'Georgia', serif;",
        company="font-size: 16px; color: #2c3e50; margin-bottom: 10px; font-family: 'Georgia', serif;",
        contact="font-size: 14px; color: #2c3e50; font-family: 'Georgia', serif;",
        link="color: #8b4513; text-decoration: none;",
        social="margin-top: 10px; font-size: 14px; font-family: 'Georgia', serif;",
    ),
}


def _px(value: float) -> str:
    # 8 -> "8", 3.5 -> "3.5"
    return f"{value:g}"


def custom_preset(style: CustomStyle) -> StylePreset:
    """Build a preset from caller supplied parameters."""
    return StylePreset(
        container=f"font-family: {style.name_font}, sans-serif; line-height: 1.5; color: #333333; padding: {_px(style.padding)}px;",
        name=(
            f"font-size: {_px(style.name_size)}px; font-weight: 600; color: {style.name_color}; "
            f"margin-bottom: {_px(style.spacing)}px;"
        ),
        role=(
            f"font-size: {_px(style.role_size)}px; color: {style.role_color}; "
            f"margin-bottom: {_px(style.spacing * 0.5)}px;"
        ),
        company=(
            f"font-size: {_px(style.company_size)}px; color: {style.company_color}; "
            f"margin-bottom: {_px(style.spacing)}px;"
        ),
        contact=f"font-size: {_px(style.contact_size)}px; color: {style.contact_color};",
        link=f"color: {style.link_color}; text-decoration: none;",
        social=f"margin-top: {_px(style.spacing)}px; font-size: {_px(style.contact_size)}px;",
        logo=f"{_LOGO} border-radius: {_px(style.logo_radius)}px;",
        promo=f"max-width: 100%; height: {_px(style.promo_height)}px; object-fit: cover; border: none;",
    )


def preset_names() -> list[str]:
    return [*PRESETS, CUSTOM_PRESET]


__all__ = ["CUSTOM_PRESET", "PRESETS", "StylePreset", "custom_preset", "preset_names"]
