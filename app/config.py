"""
Central application configuration.

Every tunable value lives here as a typed, documented field.
Any field can be overridden at runtime via an environment variable of the
same name (case-insensitive), e.g.:

    GEMINI_MODEL=gemini-1.5-pro uvicorn app.main:app     # one-off model swap
    export GEMINI_PROBE_BUDGET_SEC=30                      # staging override

List fields take JSON arrays:

    GEMINI_API_BASES='["https://generativelanguage.googleapis.com/v1"]'

A `.env` file at the project root is loaded automatically.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiConfig(BaseModel):
    """Immutable per-request view of the Gemini settings handed to the detection core."""
    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = None
    endpoint_override: Optional[str] = None
    preferred_model: Optional[str] = None
    fallback_models: tuple[str, ...] = ()
    api_bases: tuple[str, ...] = ()
    request_timeout_sec: float = 60.0
    probe_budget_sec: Optional[float] = None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,   # GEMINI_MODEL == gemini_model
        extra="ignore",         # silently drop unknown env vars
    )

    # ------------------------------------------------------------------ #
    # Gemini (Generative Language API)                                    #
    # ------------------------------------------------------------------ #
    gemini_api_key: Optional[str] = Field(
        None, description="Operator credential; detection refuses to run without it"
    )
    gemini_api_endpoint: Optional[str] = Field(
        None, description="Explicit generateContent URL, always tried first"
    )
    gemini_model: Optional[str] = Field(
        "gemini-1.5-flash", description="Preferred model, tried before the fallbacks"
    )
    gemini_fallback_models: List[str] = Field(
        default_factory=lambda: [
            "gemini-1.5-flash",
            "gemini-1.5-flash-latest",
            "gemini-1.5-pro",
            "gemini-1.5-pro-latest",
        ],
        description="Models tried after the preferred one, in order",
    )
    gemini_api_bases: List[str] = Field(
        default_factory=lambda: [
            "https://generativelanguage.googleapis.com/v1beta",
            "https://generativelanguage.googleapis.com/v1",
        ],
        description="API-version base URLs, tried in order",
    )
    gemini_request_timeout_sec: float = Field(
        60.0, description="Timeout for a single generateContent call (seconds)"
    )
    gemini_probe_budget_sec: float = Field(
        120.0, description="Time budget for the whole candidate loop (seconds)"
    )

    # ------------------------------------------------------------------ #
    # Uploads                                                             #
    # ------------------------------------------------------------------ #
    max_upload_mb: int = Field(
        20, description="Max MB for a /api/detect upload"
    )

    # ------------------------------------------------------------------ #
    # Supabase (detection history)                                        #
    # ------------------------------------------------------------------ #
    supabase_url: Optional[str] = Field(
        None, description="Project URL, e.g. https://<ref>.supabase.co"
    )
    supabase_host: Optional[str] = Field(
        None, description="Bare host; used as https://<host> when SUPABASE_URL is unset"
    )
    supabase_service_role_key: Optional[str] = Field(
        None, description="Preferred key for server-side writes"
    )
    supabase_anon_key: Optional[str] = Field(
        None, description="Fallback key when no service role key is set"
    )
    supabase_enable: bool = Field(
        False, description="Record every detection in the history table"
    )
    supabase_table: str = Field(
        "file_results", description="History table (id, file, result, confidence, created_at)"
    )
    history_limit: int = Field(
        200, description="Rows returned by GET /api/history"
    )

    # ------------------------------------------------------------------ #
    # Derived properties                                                  #
    # ------------------------------------------------------------------ #
    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @property
    def supabase_resolved_url(self) -> Optional[str]:
        if self.supabase_url:
            return self.supabase_url
        if self.supabase_host:
            return f"https://{self.supabase_host}"
        return None

    @property
    def supabase_resolved_key(self) -> Optional[str]:
        return self.supabase_service_role_key or self.supabase_anon_key

    def gemini_config(self) -> GeminiConfig:
        return GeminiConfig(
            api_key=self.gemini_api_key,
            endpoint_override=self.gemini_api_endpoint,
            preferred_model=self.gemini_model,
            fallback_models=tuple(self.gemini_fallback_models),
            api_bases=tuple(self.gemini_api_bases),
            request_timeout_sec=self.gemini_request_timeout_sec,
            probe_budget_sec=self.gemini_probe_budget_sec,
        )


# Single shared instance; import this everywhere.
settings = Settings()
