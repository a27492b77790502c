"""Configuration loading and adapter factory.

Reads a YAML config file, overlays environment variables, and builds the
quality, similarity and seeding adapters that the orchestrator is wired
with.

Env vars take precedence over YAML values.
Env var naming: COHESIVE__{section}__{key} (double underscore separator)
e.g., COHESIVE__ALGORITHM__MIN_SIZE overrides algorithm.min_size
"""

from __future__ import annotations

import logging
import os
from dataclasses import fields
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from cohesive.domain.errors import ConfigurationError
from cohesive.domain.models import AlgorithmParameters, MergingMethod, SeedStrategy
from cohesive.ports.quality import QualityFunction
from cohesive.ports.seeding import SeedGenerator
from cohesive.ports.similarity import SimilarityFunction
from cohesive.services.orchestrator import ClusteringOrchestrator

# Walk up from this file (cohesive/config.py) to the project root and load .env
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

log = logging.getLogger(__name__)

ENV_PREFIX = "COHESIVE__"

_RUNTIME_DEFAULTS: dict[str, Any] = {"workers": 1, "batch_size": 256}


def load_config(path: str = "config.yaml") -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(p) as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return apply_env_overrides(cfg)


def apply_env_overrides(
    cfg: dict[str, Any], environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Overlay ``COHESIVE__SECTION__KEY`` variables onto *cfg* in place."""
    environ = os.environ if environ is None else environ

    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        parts = key[len(ENV_PREFIX):].lower().split("__")
        if len(parts) != 2:
            continue
        section, field_name = parts
        target = cfg.setdefault(section, {})
        if not isinstance(target, dict):
            continue
        target[field_name] = _coerce(key, value, _default_for(section, field_name), target.get(field_name))

    return cfg


def _default_for(section: str, field_name: str) -> Any:
    if section == "algorithm":
        defaults = {f.name: f.default for f in fields(AlgorithmParameters)}
        return defaults.get(field_name)
    if section == "runtime":
        return _RUNTIME_DEFAULTS.get(field_name)
    return None


def _coerce(key: str, value: str, default: Any, current: Any = None) -> Any:
    """Coerce an env var string to the declared type of the field it sets.

    The field default decides the type; the value already in the YAML is
    only consulted for keys with no known default.
    """
    template = current if default is None else default
    try:
        if isinstance(template, bool):
            return value.strip().lower() in ("true", "1", "yes")
        if isinstance(template, int):
            return int(value)
        if isinstance(template, float):
            return float(value)
        if isinstance(template, (tuple, list)):
            parsed = yaml.safe_load(value)
        else:
            return value
    except (ValueError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Invalid value for {key}: {value!r}") from exc
    if not isinstance(parsed, list):
        raise ConfigurationError(f"{key} must be a YAML list, got {value!r}")
    return parsed


# ── Adapter factories ──


def build_parameters(cfg: dict[str, Any]) -> AlgorithmParameters:
    """Build the parameter bundle from the ``algorithm`` section."""
    known = {f.name for f in fields(AlgorithmParameters)}
    unknown = sorted(set(cfg) - known)
    if unknown:
        raise ConfigurationError(f"Unknown algorithm parameter(s): {', '.join(unknown)}")
    return AlgorithmParameters(**cfg)


def build_quality(params: AlgorithmParameters) -> QualityFunction:
    from cohesive.adapters.quality.cohesiveness import CohesivenessFunction

    return CohesivenessFunction(node_penalty=params.node_penalty)


def build_similarity(method: MergingMethod | str) -> SimilarityFunction:
    method = MergingMethod.parse(method)

    if method is MergingMethod.MATCH:
        from cohesive.adapters.similarity.match import MatchingScore
        return MatchingScore()

    elif method is MergingMethod.JACCARD:
        from cohesive.adapters.similarity.jaccard import JaccardSimilarity
        return JaccardSimilarity()

    elif method is MergingMethod.DICE:
        from cohesive.adapters.similarity.dice import DiceSimilarity
        return DiceSimilarity()

    elif method is MergingMethod.SIMPSON:
        from cohesive.adapters.similarity.simpson import SimpsonCoefficient
        return SimpsonCoefficient()

    raise ConfigurationError(f"Unknown merging method: {method}")


def build_seed_generator(params: AlgorithmParameters) -> SeedGenerator:
    strategy = params.seed_strategy

    if strategy is SeedStrategy.NODES:
        from cohesive.adapters.seeding.every_node import EveryNodeSeedGenerator
        return EveryNodeSeedGenerator()

    elif strategy is SeedStrategy.EDGES:
        from cohesive.adapters.seeding.every_edge import EveryEdgeSeedGenerator
        return EveryEdgeSeedGenerator()

    elif strategy is SeedStrategy.UNUSED_NODES:
        from cohesive.adapters.seeding.unused_nodes import UnusedNodesSeedGenerator
        return UnusedNodesSeedGenerator()

    elif strategy is SeedStrategy.FIXED:
        from cohesive.adapters.seeding.fixed import FixedSeedGenerator
        return FixedSeedGenerator(params.seeds)

    raise ConfigurationError(f"Unknown seed strategy: {strategy}")


# ── Top-level builders ──


def build_orchestrator_from_dict(cfg: dict[str, Any]) -> ClusteringOrchestrator:
    """Wire an orchestrator from an already loaded config mapping."""
    params = build_parameters(cfg.get("algorithm") or {})
    runtime = {**_RUNTIME_DEFAULTS, **(cfg.get("runtime") or {})}

    log.info("  → building quality function …")
    quality = build_quality(params)
    log.info("  → building similarity function (%s) …", params.merging_method.value)
    similarity = build_similarity(params.merging_method)
    log.info("  → building seed generator (%s) …", params.seed_strategy.value)
    seed_generator = build_seed_generator(params)

    return ClusteringOrchestrator(
        params,
        quality=quality,
        similarity=similarity,
        seed_generator=seed_generator,
        workers=runtime["workers"],
        batch_size=runtime["batch_size"],
    )


def build_orchestrator(config_path: str = "config.yaml") -> ClusteringOrchestrator:
    """Load config and wire all adapters into the orchestrator."""
    return build_orchestrator_from_dict(load_config(config_path))
