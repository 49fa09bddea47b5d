# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-08
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass
from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class Config:
    # OpenAI (embeddings)
    openai_api_key: str
    openai_base_url: str
    embedding_model: str

    # MongoDB document store
    mongodb_uri: str
    mongodb_database: str
    mongodb_collection: str

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        "openai_api_key": "OPENAI_API_KEY",
        "openai_base_url": "OPENAI_BASE_URL",      # e.g. https://api.openai.com/v1
        "embedding_model": "EMBEDDING_MODEL",

        "mongodb_uri": "MONGODB_URI",
        "mongodb_database": "MONGODB_DATABASE",
        "mongodb_collection": "MONGODB_COLLECTION",
    }

    # Fallbacks for the optional fields; anything not listed here is required
    DEFAULTS = {
        "openai_base_url": "https://api.openai.com/v1",
        "embedding_model": "text-embedding-ada-002",
        "mongodb_database": "clientiq",
        "mongodb_collection": "company_embeddings",
    }

    OPENAI_ENV_VARS = (
        "OPENAI_API_KEY",
        "OPENAI_BASE_URL",
        "EMBEDDING_MODEL",
    )

    MONGODB_ENV_VARS = (
        "MONGODB_URI",
        "MONGODB_DATABASE",
        "MONGODB_COLLECTION",
    )

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables."""
        kwargs = {
            field_name: (os.getenv(env_name) or Config.DEFAULTS.get(field_name, "")).strip()
            for field_name, env_name in Config.ENV_VARS.items()
        }
        return Config(**kwargs)

    def __post_init__(self):
        """Fail fast if any required config is missing."""
        missing_fields = [k for k, v in self.__dict__.items() if not v]

        if missing_fields:
            missing_env_vars = [self.ENV_VARS[f] for f in missing_fields]
            raise ValueError(f"Missing required environment variables: {missing_env_vars}")

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "openai_base_url": self.openai_base_url,
            "embedding_model": self.embedding_model,
            "mongodb_database": self.mongodb_database,
            "mongodb_collection": self.mongodb_collection,
        }
