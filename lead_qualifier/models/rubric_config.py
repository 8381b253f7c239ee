"""
Rule Rubric Configuration Models
"""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Union
from pydantic import BaseModel, Field, model_validator

from ..config.settings import DEFAULT_RUBRIC, MAX_RULE_SCORE

logger = logging.getLogger(__name__)


class KeywordTier(BaseModel):
    """One ranked keyword set: a field matching any keyword earns `points`"""
    category: str
    points: int = Field(..., ge=0)
    keywords: List[str] = Field(default_factory=list)

    def matches(self, text: str) -> bool:
        """Case-insensitive substring match against any keyword"""
        upper = text.upper()
        return any(keyword.upper() in upper for keyword in self.keywords if keyword)


class RubricConfig(BaseModel):
    """Complete rule-scoring rubric. Tiers are evaluated first-match-wins."""
    name: str = "Default Rubric"
    role_tiers: List[KeywordTier] = Field(default_factory=list)
    industry_tiers: List[KeywordTier] = Field(default_factory=list)
    role_default_points: int = Field(0, ge=0)
    industry_default_points: int = Field(0, ge=0)
    completeness_points: int = Field(10, ge=0)

    @model_validator(mode="after")
    def check_max_score(self) -> "RubricConfig":
        max_role = max([t.points for t in self.role_tiers] + [self.role_default_points])
        max_industry = max([t.points for t in self.industry_tiers] + [self.industry_default_points])
        attainable = max_role + max_industry + self.completeness_points
        if attainable > MAX_RULE_SCORE:
            raise ValueError(
                f"Rubric allows a rule score of {attainable}, above the {MAX_RULE_SCORE} cap"
            )
        return self


def create_default_rubric() -> RubricConfig:
    """Rubric built from the defaults in settings"""
    return RubricConfig(**DEFAULT_RUBRIC)


def load_rubric_config(path: Optional[Union[str, Path]] = None) -> RubricConfig:
    """
    Load the rubric from a JSON file.

    Args:
        path: JSON file to read. Falls back to the RUBRIC_CONFIG_PATH
            environment variable, then to the built-in defaults.

    Returns:
        Validated RubricConfig
    """
    path = path or os.getenv("RUBRIC_CONFIG_PATH")
    if not path:
        return create_default_rubric()

    with open(path, "r", encoding="utf-8") as handle:
        data = json.load(handle)

    rubric = RubricConfig(**data)
    logger.info(f"Loaded rubric '{rubric.name}' from {path}")
    return rubric
