"""
seo.py — Slugs and copy for programmatic SEO landing pages.

A landing page is defined by an optional location, category and age range.
Everything else about it (type, slug, title, meta description, H1, intro
HTML) is derived here so the API and the page-generation job agree.

Usage:
    from futureedge_shared.seo import PageSpec, build_page_row

    spec = PageSpec(location="Austin", category="stem")
    spec.page_type        # "location_category"
    spec.slug             # "austin-stem-summer-camps"
    build_page_row(spec)  # dict ready for programmatic_pages
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from futureedge_shared.config import settings
from futureedge_shared.constants import PageType

SLUG_SUFFIX = "-summer-camps"

_WHITESPACE_RE = re.compile(r"\s+")


def _slug_part(value: str) -> str:
    return _WHITESPACE_RE.sub("-", value.strip().lower())


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


@dataclass(frozen=True)
class PageSpec:
    location: str | None = None
    category: str | None = None
    age_min: int | None = None
    age_max: int | None = None

    @property
    def has_age(self) -> bool:
        return self.age_min is not None or self.age_max is not None

    @property
    def page_type(self) -> PageType:
        # location + category + age has no dedicated type
        if self.location and self.category:
            return "location_category"
        if self.location and self.has_age:
            return "location_age"
        if self.category and self.has_age:
            return "category_age"
        if self.category:
            return "category"
        if self.has_age:
            return "age"
        return "location"

    @property
    def slug(self) -> str:
        parts: list[str] = []
        if self.location:
            parts.append(_slug_part(self.location))
        if self.category:
            parts.append(_slug_part(self.category))
        if self.has_age:
            lo = "all" if self.age_min is None else self.age_min
            hi = "all" if self.age_max is None else self.age_max
            parts.append(f"ages-{lo}-to-{hi}")
        return "-".join(parts) + SLUG_SUFFIX


def _age_phrase(spec: PageSpec, *, both: str, only_min: str, only_max: str) -> str:
    if spec.age_min is not None and spec.age_max is not None:
        return both.format(min=spec.age_min, max=spec.age_max)
    if spec.age_min is not None:
        return only_min.format(min=spec.age_min)
    if spec.age_max is not None:
        return only_max.format(max=spec.age_max)
    return ""


def page_title(spec: PageSpec, brand: str | None = None) -> str:
    title = f"{_capitalize(spec.category)} " if spec.category else ""
    title += "Summer Camps"
    if spec.location:
        title += f" in {spec.location}"
    if spec.has_age:
        title += " for " + _age_phrase(
            spec, both="Ages {min}-{max}", only_min="Ages {min}+", only_max="Ages up to {max}",
        )
    return f"{title} | {brand or settings.brand_name}"


def meta_description(spec: PageSpec, brand: str | None = None) -> str:
    desc = "Discover amazing "
    if spec.category:
        desc += f"{spec.category} "
    desc += "summer camps"
    if spec.location:
        desc += f" in {spec.location}"
    if spec.has_age:
        desc += " for children " + _age_phrase(
            spec, both="ages {min}-{max}", only_min="ages {min} and up", only_max="ages up to {max}",
        )
    return (
        f"{desc}. Browse verified camps, read parent reviews, and book with "
        f"confidence on {brand or settings.brand_name}."
    )


def h1_title(spec: PageSpec) -> str:
    h1 = "Best "
    if spec.category:
        h1 += f"{_capitalize(spec.category)} "
    h1 += "Summer Camps"
    if spec.location:
        h1 += f" in {spec.location}"
    if spec.has_age:
        h1 += " (" + _age_phrase(
            spec, both="Ages {min}-{max}", only_min="Ages {min}+", only_max="Up to Age {max}",
        ) + ")"
    return h1


def intro_content(spec: PageSpec, brand: str | None = None) -> str:
    brand = brand or settings.brand_name
    category = f"{spec.category} " if spec.category else ""

    first = f"Looking for the perfect {category}summer camp"
    if spec.location:
        first += f" in {spec.location}"
    if spec.has_age:
        first += " for children " + _age_phrase(
            spec,
            both="ages {min}-{max}",
            only_min="ages {min} and older",
            only_max="ages {max} and younger",
        )

    closing = "Book with confidence knowing you're choosing from the best camps"
    if spec.location:
        closing += f" in {spec.location}"

    return (
        f"<p>{first}? You're in the right place!</p>"
        f"<p>{brand} makes it easy to discover, compare, and book {category}summer camps "
        "that match your child's interests and your family's needs. All camps are "
        "verified, reviewed by real parents, and backed by our safety guarantee.</p>"
        "<p>Browse our curated selection below and find the perfect summer experience "
        f"for your child. {closing}.</p>"
    )


def build_page_row(spec: PageSpec, *, camp_count: int = 0) -> dict[str, Any]:
    """Column values for a programmatic_pages row (without id/timestamps)."""
    return {
        "page_type": spec.page_type,
        "slug": spec.slug,
        "location": spec.location,
        "category": spec.category,
        "age_min": spec.age_min,
        "age_max": spec.age_max,
        "title": page_title(spec),
        "meta_description": meta_description(spec),
        "h1_title": h1_title(spec),
        "intro_content": intro_content(spec),
        "auto_generated": True,
        "camp_count": camp_count,
    }
