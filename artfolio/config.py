"""
Central application configuration.

Every tunable value lives here as a typed, documented field.
Any field can be overridden at runtime via an environment variable of the
same name (case-insensitive), e.g.:

    TEXT_AI_THRESHOLD=0.7 uvicorn artfolio.main:app   # stricter essays
    export DETECTION_TIMEOUT_SEC=10                      # staging override

A `.env` file at the project root is loaded automatically.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,   # GPTZERO_API_KEY == gptzero_api_key
        extra="ignore",         # silently drop unknown env vars
    )

    # ------------------------------------------------------------------ #
    # Vendor credentials (absent → that modality is unavailable)          #
    # ------------------------------------------------------------------ #
    gptzero_api_key: Optional[str] = Field(
        None, description="GPTZero API key for essay detection"
    )
    sightengine_api_user: Optional[str] = Field(
        None, description="Sightengine API user for image detection"
    )
    sightengine_api_secret: Optional[str] = Field(
        None, description="Sightengine API secret for image detection"
    )

    # ------------------------------------------------------------------ #
    # Vendor endpoints                                                    #
    # ------------------------------------------------------------------ #
    gptzero_api_url: str = Field(
        "https://api.gptzero.me/v2/predict/text", description="GPTZero text endpoint"
    )
    sightengine_api_url: str = Field(
        "https://api.sightengine.com/1.0/check.json", description="Sightengine check endpoint"
    )
    sightengine_models: str = Field(
        "genai", description="Sightengine model list sent with every image check"
    )

    # ------------------------------------------------------------------ #
    # AI Decision Thresholds                                              #
    # ------------------------------------------------------------------ #
    text_ai_threshold: float = Field(
        0.65, description="Essay rejected when completely_generated_prob >= this"
    )
    image_ai_threshold: float = Field(
        0.5, description="Image rejected when ai_generated score >= this"
    )
    detection_fail_closed: bool = Field(
        False, description="Treat malformed vendor responses as transport errors instead of passing"
    )

    # ------------------------------------------------------------------ #
    # Outbound HTTP                                                       #
    # ------------------------------------------------------------------ #
    detection_timeout_sec: float = Field(
        20.0, description="Total timeout for one vendor detection call (seconds)"
    )
    http_session_timeout_sec: float = Field(
        30.0, description="Default total timeout of the shared aiohttp session"
    )

    # ------------------------------------------------------------------ #
    # Input Limits                                                        #
    # ------------------------------------------------------------------ #
    min_text_chars: int = Field(
        1, description="Shortest essay text accepted for detection"
    )
    max_text_chars: int = Field(
        100_000, description="Longest essay text accepted for detection"
    )
    max_image_upload_mb: int = Field(
        20, description="Max MB for multipart image uploads"
    )
    pil_max_image_pixels: int = Field(
        40_000_000, description="PIL decompression-bomb guard (pixels)"
    )

    # ------------------------------------------------------------------ #
    # Rate Limiting                                                       #
    # ------------------------------------------------------------------ #
    rate_limit_request_window_sec: int = Field(
        60, description="Sliding window for per-user detection rate (seconds)"
    )
    rate_limit_max_requests: int = Field(
        10, description="Max detection calls allowed within the rate-limit window"
    )
    rate_limit_memory_limit: int = Field(
        1000, description="Max keys before in-memory rate-limit map is pruned"
    )

    # ------------------------------------------------------------------ #
    # Persistence & Platform                                              #
    # ------------------------------------------------------------------ #
    firebase_service_account: Optional[str] = Field(
        None, description="Service-account JSON; default credentials when unset"
    )
    upstash_redis_rest_url: Optional[str] = Field(
        None, description="Upstash REST URL for rate-limit counters"
    )
    upstash_redis_rest_token: Optional[str] = Field(
        None, description="Upstash REST token"
    )
    works_collection: str = Field(
        "works", description="Firestore collection holding published works"
    )

    # ------------------------------------------------------------------ #
    # Service                                                             #
    # ------------------------------------------------------------------ #
    log_level: str = Field("INFO", description="Root logging level")
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"], description="Origins allowed to call the API"
    )

    @property
    def max_image_upload_bytes(self) -> int:
        return self.max_image_upload_mb * 1024 * 1024


# Single shared instance — import this everywhere.
settings = Settings()
