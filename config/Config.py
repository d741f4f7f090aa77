# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-08
# Updated: 2026-10-03
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass
from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=False)

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_EMBED_MODEL = "gemini-embedding-001"


@dataclass(frozen=True)
class Config:
    # Relational storage (SQLAlchemy URL)
    database_url: str

    # Embedding provider (OpenAI-compatible endpoint)
    embedding_api_key: str = ""
    embedding_base_url: str = GEMINI_OPENAI_BASE_URL
    embedding_model: str = DEFAULT_EMBED_MODEL

    # Cognito (both ids empty -> device-id auth)
    cognito_region: str = "us-east-1"
    cognito_user_pool_id: str = ""
    cognito_client_id: str = ""

    environment: str = "development"

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        "database_url": "DATABASE_URL",

        "embedding_api_key": "GEMINI_API_KEY",
        "embedding_base_url": "TABFLOW_EMBEDDING_BASE_URL",
        "embedding_model": "TABFLOW_EMBEDDING_MODEL",

        "cognito_region": "AWS_REGION",
        "cognito_user_pool_id": "COGNITO_USER_POOL_ID",
        "cognito_client_id": "COGNITO_CLIENT_ID",

        "environment": "TABFLOW_ENV",
    }

    # Only these must be present; a missing embedding key is reported
    # per request as ProviderUnavailable instead of blocking startup.
    REQUIRED_FIELDS = ("database_url",)

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables."""
        kwargs = {}
        for field_name, env_name in Config.ENV_VARS.items():
            value = (os.getenv(env_name) or "").strip()
            if value:
                kwargs[field_name] = value

        kwargs["environment"] = Config.environment_from_env()
        kwargs.setdefault("database_url", "")
        return Config(**kwargs)

    @staticmethod
    def environment_from_env() -> str:
        """TABFLOW_ENV, else NODE_ENV (older deployments), else development."""
        value = (os.getenv(Config.ENV_VARS["environment"]) or os.getenv("NODE_ENV") or "").strip()
        return value or "development"

    @staticmethod
    def auth_mode_from_env() -> str:
        """Identity mode implied by the environment, without building a Config."""
        pool_id = (os.getenv(Config.ENV_VARS["cognito_user_pool_id"]) or "").strip()
        client_id = (os.getenv(Config.ENV_VARS["cognito_client_id"]) or "").strip()
        return "cognito" if pool_id and client_id else "device-id"

    def __post_init__(self):
        """Fail fast if any required config is missing."""
        missing_fields = [f for f in self.REQUIRED_FIELDS if not getattr(self, f)]

        if missing_fields:
            missing_env_vars = [self.ENV_VARS[f] for f in missing_fields]
            raise ValueError(f"Missing required environment variables: {missing_env_vars}")

    @property
    def use_cognito(self) -> bool:
        return bool(self.cognito_user_pool_id and self.cognito_client_id)

    @staticmethod
    def production_env(environment: str) -> bool:
        return environment.strip().lower() == "production"

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "database": self.database_url.split("@")[-1],
            "embedding_base_url": self.embedding_base_url,
            "embedding_model": self.embedding_model,
            "embedding_configured": bool(self.embedding_api_key),
            "auth": "cognito" if self.use_cognito else "device-id",
            "cognito_region": self.cognito_region,
            "environment": self.environment,
        }
