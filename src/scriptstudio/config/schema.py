"""Pydantic schemas for YAML configuration validation."""

from pydantic import BaseModel, Field
from typing import List, Optional

MAX_SCENES = 200

class GenerationCfg(BaseModel):
    """Which provider writes scripts and how to reach it."""
    provider: str = Field(default="gemini", pattern="^(gemini|openai|mock)$",
                          description="Generation backend: gemini|openai|mock")
    model: str = Field(default="gemini-2.5-flash", description="Provider model name")
    api_key_env: str = Field(default="GEMINI_API_KEY",
                             description="Environment variable holding the provider API key")
    endpoint: str = Field(default="https://generativelanguage.googleapis.com/v1beta/models",
                          description="Base URL for REST providers")
    timeout: float = Field(default=120.0, gt=0, description="Request timeout in seconds")
    max_retries: int = Field(default=3, ge=0, le=10,
                             description="Retry attempts for SDK providers with transient errors")

    class Config:
        extra = "forbid"

class SegmentationCfg(BaseModel):
    """Segmentation engine settings."""
    marker_label: str = Field(default="Scene", description="Word that opens a 'Scene N:' marker")

    class Config:
        extra = "forbid"

class LimitsCfg(BaseModel):
    """Request bounds enforced at the service boundary, never inside the engine."""
    min_count: int = Field(default=1, ge=1, le=MAX_SCENES)
    max_count: int = Field(default=MAX_SCENES, ge=1, le=MAX_SCENES)
    default_count: int = Field(default=40, ge=1, le=MAX_SCENES,
                               description="Count used by the CLI when none is given")
    min_idea_length: int = Field(default=5, ge=1)

    class Config:
        extra = "forbid"

class HistoryCfg(BaseModel):
    """Script history persistence."""
    backend: str = Field(default="memory", pattern="^(memory|sqlite)$")
    path: Optional[str] = Field(default=None, description="SQLite database file")
    limit: int = Field(default=100, ge=1, le=1000, description="Max records returned per listing")

    class Config:
        extra = "forbid"

class AuthCfg(BaseModel):
    """Identity and session token settings."""
    secret_env: str = Field(default="JWT_SECRET", description="Environment variable holding the token secret")
    token_ttl_days: int = Field(default=7, ge=1)
    cookie_name: str = Field(default="token")
    secure_cookies: bool = Field(default=False)
    bcrypt_rounds: int = Field(default=10, ge=4, le=16)

    class Config:
        extra = "forbid"

class StudioConfig(BaseModel):
    """Complete Script Studio configuration."""
    version: int = Field(default=1, description="Config schema version")
    generation: GenerationCfg = Field(default_factory=GenerationCfg)
    segmentation: SegmentationCfg = Field(default_factory=SegmentationCfg)
    limits: LimitsCfg = Field(default_factory=LimitsCfg)
    history: HistoryCfg = Field(default_factory=HistoryCfg)
    auth: AuthCfg = Field(default_factory=AuthCfg)

    class Config:
        extra = "forbid"  # Strict validation

    def validate_settings(self) -> List[str]:
        """Validate cross-field settings and return any issues."""
        issues = []

        limits = self.limits
        if limits.min_count > limits.max_count:
            issues.append(f"min_count {limits.min_count} is greater than max_count {limits.max_count}")
        elif not limits.min_count <= limits.default_count <= limits.max_count:
            issues.append(
                f"default_count {limits.default_count} outside [{limits.min_count}, {limits.max_count}]"
            )

        label = self.segmentation.marker_label
        if not label.strip():
            issues.append("Marker label is empty")
        elif not label.replace(" ", "").isalnum():
            issues.append(f"Marker label must be a word, got '{label}'")

        if self.history.backend == "sqlite" and not (self.history.path or "").strip():
            issues.append("History backend 'sqlite' requires a path")

        if not self.generation.api_key_env.strip() and self.generation.provider != "mock":
            issues.append(f"Provider '{self.generation.provider}' needs api_key_env")

        return issues
