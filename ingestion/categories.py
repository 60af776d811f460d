"""Closed category set plus keyword/query tables used for collection."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple


class Category(str, Enum):
    ALL = "all"
    AI = "ai"
    MUSIC_TECH = "music-tech"
    SCIENCE_TECH = "science-tech"
    MATERIALS = "materials"
    EMBEDDED = "embedded"
    BCI = "bci"

    @property
    def is_wildcard(self) -> bool:
        return self is Category.ALL


CONCRETE_CATEGORIES: Tuple[Category, ...] = tuple(c for c in Category if not c.is_wildcard)


def _keywords(*words: str) -> FrozenSet[str]:
    return frozenset(w.lower() for w in words)


# A record must contain at least one of these (case-folded) to be accepted into the category.
CATEGORY_KEYWORDS: Mapping[Category, FrozenSet[str]] = MappingProxyType(
    {
        Category.AI: _keywords(
            "artificial", "intelligence", "machine", "learning", "neural", "algorithm", "model", "AI"
        ),
        Category.MUSIC_TECH: _keywords(
            "music", "audio", "sound", "recording", "production", "studio", "instrument", "acoustic"
        ),
        Category.SCIENCE_TECH: _keywords(
            "science", "scientific", "research", "study", "experiment", "discovery", "technology"
        ),
        Category.MATERIALS: _keywords(
            "material", "materials", "nanotechnology", "polymer", "semiconductor", "crystal", "composite"
        ),
        Category.EMBEDDED: _keywords(
            "embedded", "FPGA", "ASIC", "microcontroller", "chip", "processor", "hardware", "IoT"
        ),
        Category.BCI: _keywords(
            "brain", "neural", "neuron", "interface", "implant", "prosthetic", "neurotechnology"
        ),
    }
)

# Search phrases sent to the upstream news API, one request per phrase.
CATEGORY_QUERIES: Mapping[Category, Tuple[str, ...]] = MappingProxyType(
    {
        Category.AI: (
            "artificial intelligence breakthrough",
            "machine learning research",
            "deep learning model",
            "AI algorithm",
            "neural network",
        ),
        Category.MUSIC_TECH: (
            "music production software",
            "audio processing technology",
            "digital audio workstation",
            "music AI",
            "audio engineering",
        ),
        Category.SCIENCE_TECH: (
            "scientific research technology",
            "laboratory innovation",
            "research methodology",
            "scientific computing",
        ),
        Category.MATERIALS: (
            "materials science research",
            "nanotechnology breakthrough",
            "semiconductor development",
            "polymer research",
            "metamaterials",
        ),
        Category.EMBEDDED: (
            "embedded system design",
            "FPGA development",
            "ASIC chip",
            "microcontroller programming",
            "IoT hardware",
        ),
        Category.BCI: (
            "brain computer interface",
            "neural prosthetics",
            "neurotechnology research",
            "brain implant technology",
            "neural signal processing",
        ),
    }
)
