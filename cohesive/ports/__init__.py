"""Capability interfaces the services are written against."""

from cohesive.ports.quality import QualityFunction
from cohesive.ports.seeding import SeedGenerator
from cohesive.ports.similarity import SimilarityFunction

__all__ = ["QualityFunction", "SeedGenerator", "SimilarityFunction"]
