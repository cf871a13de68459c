"""Engine exports."""
from .algorithms import ALL_ALGORITHMS, Algorithm, AlgorithmInfo, algorithm_info, parse_algorithm
from .orchestrator import (
    GeneratedCandidate,
    UniqueLogoParams,
    describe_concept,
    generate_all_algorithm_samples,
    generate_single_logo,
    generate_unique_logos,
    regenerate_logo,
)
from .params import SeedParameters, extract_parameters
from .registry import (
    DigestRegistry,
    InMemoryDigestRegistry,
    RegistryStats,
    claim_digest,
    default_registry,
    registry_stats,
    verify_uniqueness,
)
from .scoring import QualityMetrics, ScoreResult, score_candidate
from .seed import MasterSeed, generate_master_seed, generate_unique_seed
from .selector import select_algorithm

__all__ = [
    "ALL_ALGORITHMS",
    "Algorithm",
    "AlgorithmInfo",
    "DigestRegistry",
    "GeneratedCandidate",
    "InMemoryDigestRegistry",
    "MasterSeed",
    "QualityMetrics",
    "RegistryStats",
    "ScoreResult",
    "SeedParameters",
    "UniqueLogoParams",
    "algorithm_info",
    "claim_digest",
    "default_registry",
    "describe_concept",
    "extract_parameters",
    "generate_all_algorithm_samples",
    "generate_master_seed",
    "generate_single_logo",
    "generate_unique_logos",
    "generate_unique_seed",
    "parse_algorithm",
    "regenerate_logo",
    "registry_stats",
    "score_candidate",
    "select_algorithm",
    "verify_uniqueness",
]
