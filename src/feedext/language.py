"""
Language Tags

Validated BCP 47 (RFC 5646) language tag parsing for language-valued fields.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

# langtag = language ["-" script] ["-" region] *("-" variant) *("-" extension) ["-" privateuse]
_LANGTAG = re.compile(
    r"""
    ^(?P<language>[a-z]{2,3}(?:-[a-z]{3}){0,3}|[a-z]{4}|[a-z]{5,8})
    (?:-(?P<script>[a-z]{4}))?
    (?:-(?P<region>[a-z]{2}|\d{3}))?
    (?P<variants>(?:-(?:[a-z\d]{5,8}|\d[a-z\d]{3}))*)
    (?P<extensions>(?:-[a-wyz\d](?:-[a-z\d]{2,8})+)*)
    (?:-(?P<privateuse>x(?:-[a-z\d]{1,8})+))?$
    """,
    re.IGNORECASE | re.VERBOSE,
)

_PRIVATEUSE = re.compile(r"^x(?:-[a-z\d]{1,8})+$", re.IGNORECASE)


@dataclass(frozen=True)
class LanguageTag:
    """Parsed language tag in canonical casing."""
    language: str
    script: Optional[str] = None
    region: Optional[str] = None
    variants: Tuple[str, ...] = field(default_factory=tuple)
    extensions: Tuple[str, ...] = field(default_factory=tuple)
    private_use: Optional[str] = None

    def __str__(self) -> str:
        parts = [self.language]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        parts.extend(self.variants)
        parts.extend(self.extensions)
        if self.private_use:
            parts.append(self.private_use)
        return "-".join(p for p in parts if p)


def _split_extensions(text: str) -> Tuple[str, ...]:
    """Group '-u-ca-gregory-t-...' into ('u-ca-gregory', 't-...')."""
    groups = []
    for subtag in text.strip("-").split("-") if text else []:
        if len(subtag) == 1:
            groups.append([subtag.lower()])
        elif groups:
            groups[-1].append(subtag.lower())
    return tuple("-".join(g) for g in groups)


def parse_language_tag(value: Optional[str]) -> Optional[LanguageTag]:
    """
    Parse and canonicalize a BCP 47 language tag.

    Args:
        value: Tag text, e.g. "en-us"

    Returns:
        LanguageTag, or None if the value is empty or not a valid tag
    """
    if not value:
        return None
    text = value.strip().replace("_", "-")

    if _PRIVATEUSE.match(text):
        return LanguageTag(language="", private_use=text.lower())

    match = _LANGTAG.match(text)
    if match is None:
        return None

    script = match.group("script")
    region = match.group("region")
    variants = match.group("variants")
    return LanguageTag(
        language=match.group("language").lower(),
        script=script.title() if script else None,
        region=region.upper() if region else None,
        variants=tuple(v.lower() for v in variants.strip("-").split("-")) if variants else (),
        extensions=_split_extensions(match.group("extensions")),
        private_use=match.group("privateuse").lower() if match.group("privateuse") else None,
    )
