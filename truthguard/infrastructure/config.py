"""Engine configuration loaded from the environment."""

import logging
import os
from typing import List

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class EngineConfig(BaseModel):
    """Configuration for the claim engine."""

    similarity_threshold: float = Field(
        default=0.6, ge=0.0, le=1.0,
        description="Minimum similarity for two claims to count as duplicates",
    )
    analysis_delay: float = Field(
        default=3.0, ge=0.0,
        description="Seconds before a new claim's simulated AI analysis fires",
    )
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create configuration from environment variables."""
        threshold = float(os.getenv('TRUTHGUARD_SIMILARITY_THRESHOLD', '0.6'))
        delay = float(os.getenv('TRUTHGUARD_ANALYSIS_DELAY', '3.0'))
        origins = [
            origin.strip()
            for origin in os.getenv('TRUTHGUARD_CORS_ORIGINS', '*').split(',')
            if origin.strip()
        ]

        logger.info(f"⚙️ Engine config: threshold={threshold}, analysis_delay={delay}s")
        if origins == ["*"]:
            logger.warning("⚠️ CORS allows every origin - set TRUTHGUARD_CORS_ORIGINS in production")

        return cls(
            similarity_threshold=threshold,
            analysis_delay=delay,
            cors_origins=origins,
        )
