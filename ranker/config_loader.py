import yaml
import os
import logging
from typing import Optional
from pydantic import BaseModel, Field, ValidationError

from ranker.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_RELATED_FIELDS_FILE = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "data", "related_fields.yaml"
)


class SimilarityConfig(BaseModel):
    """Thresholds for degree and eligibility text matching (all on a 0-100 scale)."""
    degree_match_threshold: float = 85.0  # field similarity that counts as the same degree
    eligibility_match_threshold: float = 92.0  # stricter: licences differ by one word
    related_field_score: float = 85.0  # education floor when fields are listed as related
    level_shortfall_penalty: float = 6.0  # points per degree level below the required one

    # YAML map of degree field -> related fields. None = packaged table.
    related_fields_file: Optional[str] = None


class SkillMatchConfig(BaseModel):
    """
    Tier thresholds for the skill matcher.

    exact  -> normalized strings equal
    high   -> similarity >= high_threshold
    medium -> combined (edit/semantic) similarity >= medium_threshold
    token  -> shared keywords only

    exact/high earn full credit; medium/token earn partial credit only above
    scoring_floor, so weakly related skills are reported but score 0.
    """
    high_threshold: float = 80.0
    medium_threshold: float = 50.0
    scoring_floor: float = 55.0
    token_weight: float = 30.0  # keyword overlap ratio * token_weight
    semantic_threshold: float = 65.0
    semantic_weight: float = 0.85
    partial_credit_weight: float = 1.0


class RankingConfig(BaseModel):
    """
    Configuration for the RankingService.

    Algorithm weights and the ensemble tie-break threshold are fixed
    module constants in ranker.scorer and are intentionally not here.
    """
    similarity: SimilarityConfig = Field(default_factory=SimilarityConfig)
    skills: SkillMatchConfig = Field(default_factory=SkillMatchConfig)

    # Score given to a factor the job does not require (degree, skills, eligibility)
    neutral_score: float = 100.0

    experience_decimals: int = 1
    score_decimals: int = 2

    # Phase-1 workers; 1 = score applicants sequentially
    max_workers: int = 1


def load_config(config_path: str = "ranker.yaml") -> RankingConfig:
    # If not found at relative path (e.g. running from a subdirectory), try the repo root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "ranker.yaml")

    data = {}
    if os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Could not parse {config_path}: {e}") from e
    else:
        logger.info("No ranker.yaml found, using default ranking configuration")

    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping, got {type(data).__name__}")

    # Allow env var override for worker count
    env_workers = os.environ.get("RANKER_MAX_WORKERS")
    if env_workers:
        data['max_workers'] = env_workers

    # Allow env var override for the neutral score
    env_neutral = os.environ.get("RANKER_NEUTRAL_SCORE")
    if env_neutral:
        data['neutral_score'] = env_neutral

    try:
        return RankingConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid ranking configuration: {e}") from e
