"""Value objects consumed by the signature renderer."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

# template content is stored with the editor's camelCase keys
_CONTENT_KEYS = {
    "full_name": "fullName",
    "job_title": "jobTitle",
    "company": "company",
    "email": "email",
    "phone": "phone",
    "website": "website",
    "linkedin": "linkedIn",
    "twitter": "twitter",
    "instagram": "instagram",
    "logo_url": "logoUrl",
    "promo_image": "promotionalImage",
    "promo_link": "promotionalLink",
}

_STYLE_KEYS = {
    "name_font": "nameFont",
    "name_size": "nameSize",
    "name_color": "nameColor",
    "role_size": "roleSize",
    "role_color": "roleColor",
    "company_size": "companySize",
    "company_color": "companyColor",
    "contact_size": "contactSize",
    "contact_color": "contactColor",
    "link_color": "linkColor",
    "spacing": "spacing",
    "padding": "padding",
    "logo_radius": "logoRadius",
    "promo_height": "promoHeight",
}

_STYLE_TEXT_ATTRS = {"name_font", "name_color", "role_color", "company_color", "contact_color", "link_color"}


def _lookup(data: Mapping[str, Any], attr: str, alias: str) -> Any:
    if alias in data:
        return data[alias]
    return data.get(attr)


@dataclass(frozen=True, slots=True)
class SignatureFields:
    full_name: Optional[str] = None
    job_title: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    instagram: Optional[str] = None
    logo_url: Optional[str] = None
    promo_image: Optional[str] = None
    promo_link: Optional[str] = None

    @classmethod
    def from_content(cls, content: Mapping[str, Any] | None) -> "SignatureFields":
        """Build from stored template content; blank strings count as absent."""
        if not content:
            return cls()
        values: dict[str, Optional[str]] = {}
        for attr, alias in _CONTENT_KEYS.items():
            value = _lookup(content, attr, alias)
            if value is None:
                continue
            text = str(value).strip()
            if text:
                values[attr] = text
        return cls(**values)

    def social_links(self) -> list[tuple[str, str]]:
        links = [("LinkedIn", self.linkedin), ("Twitter", self.twitter), ("Instagram", self.instagram)]
        return [(label, url) for label, url in links if url]

    def has_contact_block(self) -> bool:
        return bool(self.email or self.phone or self.website or self.social_links())


@dataclass(frozen=True, slots=True)
class CustomStyle:
    """Per-field style parameters, only honoured by the ``custom`` preset."""

    name_font: str = "Arial"
    name_size: float = 18
    name_color: str = "#2563eb"
    role_size: float = 14
    role_color: str = "#666666"
    company_size: float = 14
    company_color: str = "#666666"
    contact_size: float = 13
    contact_color: str = "#333333"
    link_color: str = "#2563eb"
    spacing: float = 8
    padding: float = 0
    logo_radius: float = 0
    promo_height: float = 80

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "CustomStyle":
        if not data:
            return cls()
        values: dict[str, Any] = {}
        for attr, alias in _STYLE_KEYS.items():
            value = _lookup(data, attr, alias)
            if value is None:
                continue
            values[attr] = str(value) if attr in _STYLE_TEXT_ATTRS else float(value)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {_STYLE_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}


__all__ = ["CustomStyle", "SignatureFields"]
