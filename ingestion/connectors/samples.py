"""Built-in demonstration records served when the upstream API is unavailable."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

from ingestion.categories import CONCRETE_CATEGORIES, Category

from .base import RawRecord

_PLACEHOLDER_IMAGE = "https://via.placeholder.com/400x200"

# (title, description, url, source id, source name, hours ago)
_SampleRow = Tuple[str, str, str, str, str, float]

_SAMPLES: Dict[Category, List[_SampleRow]] = {
    Category.AI: [
        (
            "New AI Algorithm Solves Complex Machine Learning Optimization Problems",
            "Breakthrough artificial intelligence research shows neural networks can now solve previously intractable optimization problems in machine learning.",
            "https://techcrunch.com/artificial-intelligence/",
            "techcrunch",
            "TechCrunch",
            0,
        ),
        (
            "Deep Learning Model Achieves 99% Accuracy in Medical Diagnosis",
            "Researchers develop advanced neural network that uses artificial intelligence to diagnose diseases with unprecedented accuracy.",
            "https://www.nature.com/subjects/machine-learning",
            "nature",
            "Nature AI",
            1,
        ),
        (
            "Revolutionary Neural Network Architecture Transforms AI Performance",
            "Scientists create breakthrough artificial intelligence system that uses advanced machine learning to achieve human-level reasoning.",
            "https://www.wired.com/tag/artificial-intelligence/",
            "wired",
            "Wired AI",
            2,
        ),
        (
            "Machine Learning Algorithm Breakthrough Enables Real-Time Intelligence",
            "Advanced AI model processes complex neural networks faster than ever, opening new possibilities for intelligent systems.",
            "https://www.reuters.com/technology/artificial-intelligence/",
            "reuters",
            "Reuters AI",
            3,
        ),
    ],
    Category.MUSIC_TECH: [
        (
            "Revolutionary Audio Processing Technology Changes Music Production",
            "New digital audio workstation uses advanced sound processing algorithms to transform music recording and production workflows.",
            "https://www.soundonsound.com/",
            "sound-on-sound",
            "Sound on Sound",
            0,
        ),
        (
            "AI-Powered Music Software Helps Studio Engineers Perfect Recordings",
            "Cutting-edge audio engineering tool uses machine learning to optimize music production and sound quality.",
            "https://www.musictech.net/",
            "music-tech",
            "Music Technology",
            2,
        ),
        (
            "Music Production Breakthrough: Smart Audio Engineering Tools Launch",
            "Revolutionary music technology platform combines AI with traditional audio engineering for next-generation sound production.",
            "https://www.prosoundnetwork.com/",
            "prosound",
            "Pro Sound Network",
            4,
        ),
    ],
    Category.SCIENCE_TECH: [
        (
            "Scientific Research Breakthrough: Technology Advances Enable New Discoveries",
            "Latest scientific research methodology using advanced technology leads to groundbreaking discoveries in experimental science.",
            "https://www.science.org/",
            "science",
            "Science & Technology Review",
            0,
        ),
        (
            "Laboratory Innovation: New Technology Platforms Enable Collaborative Research",
            "Cutting-edge laboratory technology creates connected research environments for accelerated scientific discovery and study.",
            "https://www.scientificamerican.com/",
            "sci-american",
            "Scientific American",
            2,
        ),
        (
            "Scientific Computing Advances Enable Complex Research Modeling",
            "Advanced technology platforms provide scientists with powerful tools for modeling complex systems and analyzing research data.",
            "https://phys.org/",
            "phys-org",
            "Phys.org",
            4,
        ),
    ],
    Category.MATERIALS: [
        (
            "Scientists Develop Revolutionary Semiconductor Materials for Quantum Computing",
            "Breakthrough in materials science research creates new polymer composites and nanotechnology applications for quantum processors.",
            "https://news.mit.edu/topic/materials",
            "mit-news",
            "MIT Materials Research",
            0,
        ),
        (
            "Nanotechnology Breakthrough: New Metamaterials Enable Invisible Cloaking",
            "Advanced materials science creates novel composite materials using nanotechnology for revolutionary optical applications.",
            "https://www.science.org/topic/materials-science",
            "science",
            "Materials Science Journal",
            1,
        ),
        (
            "Semiconductor Innovation: Crystal Engineering Enables Faster Computing",
            "Materials science breakthrough creates new semiconductor crystal structures for ultra-high-speed processing applications.",
            "https://spectrum.ieee.org/semiconductors",
            "ieee",
            "IEEE Spectrum Materials",
            3,
        ),
    ],
    Category.EMBEDDED: [
        (
            "New FPGA Design Revolutionizes Embedded System Performance",
            "Advanced embedded systems engineering breakthrough shows ASIC-like performance in reconfigurable FPGA hardware for IoT applications.",
            "https://www.embedded.com/",
            "embedded",
            "Embedded Systems Engineering",
            0,
        ),
        (
            "Microcontroller Innovation Enables Ultra-Low Power IoT Hardware",
            "New embedded processor design using advanced chip architecture dramatically reduces power consumption in IoT hardware systems.",
            "https://arstechnica.com/gadgets/",
            "ars-technica",
            "Ars Technica Hardware",
            1.5,
        ),
        (
            "ASIC Development Breakthrough Accelerates Chip Design Innovation",
            "Revolutionary embedded hardware engineering creates custom ASIC designs for next-generation IoT processor applications.",
            "https://spectrum.ieee.org/semiconductors",
            "ieee",
            "IEEE Embedded Systems",
            3,
        ),
    ],
    Category.BCI: [
        (
            "Brain-Computer Interface Enables Paralyzed Patients to Control Neural Prosthetics",
            "Revolutionary neurotechnology research allows brain implant users to control prosthetic devices using neural signals from brain interface systems.",
            "https://www.nature.com/subjects/neuroscience",
            "nature",
            "Nature Neurotechnology",
            0,
        ),
        (
            "Advanced Neural Interface Technology Restores Communication for Locked-in Patients",
            "Breakthrough brain-computer interface uses neural signal processing to enable communication through brain implant technology.",
            "https://spectrum.ieee.org/biomedical",
            "neuroscience",
            "Journal of Neurotechnology",
            2,
        ),
        (
            "Brain Implant Technology Advances Enable Thought-Controlled Computing",
            "Cutting-edge neurotechnology allows users to control computers and devices directly through brain signals via neural interface implants.",
            "https://www.technologyreview.com/topic/biotechnology/",
            "mit-tech-review",
            "MIT Technology Review",
            5,
        ),
    ],
}


def sample_articles(category: Category, now: Optional[datetime] = None) -> List[RawRecord]:
    """Return sample records shaped like News API articles.

    The wildcard yields the samples of every concrete category.
    """
    current = now or datetime.now(timezone.utc)
    categories = CONCRETE_CATEGORIES if category.is_wildcard else (category,)
    records: List[RawRecord] = []
    for cat in categories:
        for title, description, url, source_id, source_name, hours_ago in _SAMPLES.get(cat, []):
            records.append(
                {
                    "title": title,
                    "description": description,
                    "url": url,
                    "urlToImage": _PLACEHOLDER_IMAGE,
                    "publishedAt": (current - timedelta(hours=hours_ago)).isoformat(),
                    "source": {"id": source_id, "name": source_name},
                }
            )
    return records
