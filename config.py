"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


def _parse_optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(
        default_factory=lambda: os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    )
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class ShoeConfig:
    """Default shoe and table configuration."""

    num_decks: int = field(default_factory=lambda: int(os.getenv("SHOE_NUM_DECKS", "6")))
    dealer_hits_soft_17: bool = field(
        default_factory=lambda: os.getenv("DEALER_HITS_SOFT_17", "false").lower() == "true"
    )
    blackjack_payout: float = 1.5

    def __post_init__(self) -> None:
        if self.num_decks < 1 or self.num_decks > 8:
            raise ValueError("SHOE_NUM_DECKS must be between 1 and 8")


@dataclass(frozen=True)
class EvolutionSettings:
    """Defaults and upper bounds for evolution runs requested over the API."""

    population_size: int = field(default_factory=lambda: int(os.getenv("GA_POPULATION_SIZE", "20")))
    generations: int = field(default_factory=lambda: int(os.getenv("GA_GENERATIONS", "5")))
    hands_per_evaluation: int = field(
        default_factory=lambda: int(os.getenv("GA_HANDS_PER_EVALUATION", "200"))
    )
    mutation_rate: float = field(default_factory=lambda: float(os.getenv("GA_MUTATION_RATE", "0.3")))
    mutation_impact: float = field(default_factory=lambda: float(os.getenv("GA_MUTATION_IMPACT", "0.1")))
    workers: int = field(default_factory=lambda: int(os.getenv("GA_WORKERS", "1")))
    seed: int | None = field(default_factory=lambda: _parse_optional_int("GA_SEED"))

    # Caps so a single request cannot tie up the server
    max_population_size: int = 200
    max_generations: int = 100
    max_hands_per_evaluation: int = 5000

    def __post_init__(self) -> None:
        if self.population_size < 2:
            raise ValueError("GA_POPULATION_SIZE must be at least 2")
        if self.workers < 1:
            raise ValueError("GA_WORKERS must be at least 1")


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))

    shoe: ShoeConfig = field(default_factory=ShoeConfig)
    evolution: EvolutionSettings = field(default_factory=EvolutionSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)


# Global configuration instance
config = AppConfig()
