"""
Configuration for docgraph.

Supports loading from:
1. Environment variables (highest priority)
2. YAML config file
3. Default values (fallback)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    """LLM provider configuration (answer generation)."""

    provider: str = "ollama"  # ollama, openai
    model: str = "llama3.1:8b"
    # Ollama host, or a custom endpoint for OpenAI-compatible servers
    base_url: str | None = None
    api_key: str | None = None
    temperature: float = 0.7
    max_tokens: int = 2000
    timeout: float = 120.0


class EmbedderConfig(BaseModel):
    """Embedder configuration."""

    provider: str = "ollama"  # ollama, openai, hash
    model: str = "nomic-embed-text"
    # Ollama host, or a custom endpoint for OpenAI-compatible servers
    base_url: str | None = None
    api_key: str | None = None
    timeout: float = 120.0
    # Optional: embedding dimension (fallback to auto-detect)
    dimension: int | None = None


class ChunkingConfig(BaseModel):
    """Fixed-size text chunking used when a caller supplies no chunks."""

    chunk_size: int = 1000
    overlap: int = 200


class GraphConfig(BaseModel):
    """Graph construction thresholds."""

    # references: tokens longer than this many characters are considered
    min_token_length: int = 4
    # references: an edge needs strictly more shared tokens than this
    min_shared_tokens: int = 2
    # visual_of: OCR prefix length matched against chunk content
    visual_prefix_chars: int = 20
    # Cap on chunks taking part in pairwise cross-linking (None = all)
    max_reference_chunks: int | None = None


class EscalationConfig(BaseModel):
    """Heuristic gate for the search-agent pass."""

    question_words: list[str] = Field(
        default_factory=lambda: ["what", "who", "where", "when", "why", "how", "which"]
    )
    max_query_tokens: int = 5
    min_primary_units: int = 3


class RetrievalConfig(BaseModel):
    """Hybrid retrieval limits and deadlines."""

    primary_limit: int = 10
    max_context_units: int = 10
    max_profile_memories: int = 5
    search_agent_max_results: int = 5
    key_term_limit: int = 5
    key_term_search_limit: int = 3
    content_char_limit: int = 500
    # Graph expansion depth for file-scoped queries (0 disables)
    expansion_depth: int = 1
    embed_timeout: float = 30.0
    search_agent_timeout: float = 30.0


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True


class Config(BaseModel):
    """Main configuration."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    embedder: EmbedderConfig = Field(default_factory=EmbedderConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    graph: GraphConfig = Field(default_factory=GraphConfig)
    escalation: EscalationConfig = Field(default_factory=EscalationConfig)
    retrieval: RetrievalConfig = Field(default_factory=RetrievalConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # User that owns requests without an explicit user id
    default_user_id: str = "default-user"

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load configuration from environment variables.

        Priority: .env file -> system environment variables -> defaults

        Args:
            env_file: Optional path to .env file (default: .env in project root)

        Returns:
            Config instance

        Environment variables:
            DOCGRAPH_LLM_PROVIDER: LLM provider (ollama, openai)
            DOCGRAPH_LLM_MODEL: LLM model name
            DOCGRAPH_LLM_BASE_URL: LLM base URL
            DOCGRAPH_LLM_API_KEY: LLM API key (for OpenAI)
            DOCGRAPH_EMBEDDER_PROVIDER: Embedder provider (ollama, openai, hash)
            DOCGRAPH_EMBEDDER_MODEL: Embedder model name
            DOCGRAPH_EMBEDDER_API_KEY: Embedder API key (for OpenAI)
            DOCGRAPH_EMBEDDER_DIMENSION: Embedding dimension (optional)
            DOCGRAPH_CHUNK_SIZE / DOCGRAPH_CHUNK_OVERLAP: Text chunking
            DOCGRAPH_RETRIEVAL_*: Retrieval limits and deadlines
            DOCGRAPH_LOG_*: Logging
        """
        # Load .env file if provided or exists
        if env_file:
            load_dotenv(env_file)
        elif Path(".env").exists():
            load_dotenv()

        def get_env(key: str, default: Any = None) -> Any:
            """Get environment variable with type conversion."""
            value = os.getenv(key)
            if value is None:
                return default
            # If value is empty string, return default
            if value == "":
                return default
            # Convert boolean strings
            if isinstance(default, bool):
                return str(value).lower() in ("true", "1", "yes")
            # Convert numeric strings
            if isinstance(default, int):
                return int(value)
            if isinstance(default, float):
                return float(value)
            return value

        dimension = get_env("DOCGRAPH_EMBEDDER_DIMENSION")

        return cls(
            llm=LLMConfig(
                provider=get_env("DOCGRAPH_LLM_PROVIDER", "ollama"),
                model=get_env("DOCGRAPH_LLM_MODEL", "llama3.1:8b"),
                base_url=get_env("DOCGRAPH_LLM_BASE_URL"),
                api_key=get_env("DOCGRAPH_LLM_API_KEY"),
                temperature=get_env("DOCGRAPH_LLM_TEMPERATURE", 0.7),
                max_tokens=get_env("DOCGRAPH_LLM_MAX_TOKENS", 2000),
                timeout=get_env("DOCGRAPH_LLM_TIMEOUT", 120.0),
            ),
            embedder=EmbedderConfig(
                provider=get_env("DOCGRAPH_EMBEDDER_PROVIDER", "ollama"),
                model=get_env("DOCGRAPH_EMBEDDER_MODEL", "nomic-embed-text"),
                base_url=get_env("DOCGRAPH_EMBEDDER_BASE_URL"),
                api_key=get_env("DOCGRAPH_EMBEDDER_API_KEY"),
                timeout=get_env("DOCGRAPH_EMBEDDER_TIMEOUT", 120.0),
                dimension=int(dimension) if dimension else None,
            ),
            chunking=ChunkingConfig(
                chunk_size=get_env("DOCGRAPH_CHUNK_SIZE", 1000),
                overlap=get_env("DOCGRAPH_CHUNK_OVERLAP", 200),
            ),
            retrieval=RetrievalConfig(
                primary_limit=get_env("DOCGRAPH_RETRIEVAL_PRIMARY_LIMIT", 10),
                max_context_units=get_env("DOCGRAPH_RETRIEVAL_MAX_CONTEXT_UNITS", 10),
                search_agent_max_results=get_env("DOCGRAPH_RETRIEVAL_SEARCH_AGENT_MAX_RESULTS", 5),
                expansion_depth=get_env("DOCGRAPH_RETRIEVAL_EXPANSION_DEPTH", 1),
                embed_timeout=get_env("DOCGRAPH_RETRIEVAL_EMBED_TIMEOUT", 30.0),
                search_agent_timeout=get_env("DOCGRAPH_RETRIEVAL_SEARCH_AGENT_TIMEOUT", 30.0),
            ),
            logging=LoggingConfig(
                level=get_env("DOCGRAPH_LOG_LEVEL", "INFO"),
                log_to_file=get_env("DOCGRAPH_LOG_TO_FILE", False),
                log_dir=get_env("DOCGRAPH_LOG_DIR", "logs"),
                file_rotation=get_env("DOCGRAPH_LOG_FILE_ROTATION", "10 MB"),
                file_retention=get_env("DOCGRAPH_LOG_FILE_RETENTION", "7 days"),
                compression=get_env("DOCGRAPH_LOG_COMPRESSION", "zip"),
                serialize=get_env("DOCGRAPH_LOG_SERIALIZE", True),
            ),
            default_user_id=get_env("DOCGRAPH_DEFAULT_USER_ID", "default-user"),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        return cls(**(data or {}))

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Load configuration with priority: env vars > YAML > defaults.

        Args:
            yaml_path: Optional path to YAML config
            env_file: Optional path to .env file

        Returns:
            Config instance
        """
        # Start with YAML if provided
        if yaml_path and Path(yaml_path).exists():
            with open(yaml_path) as f:
                config_dict = yaml.safe_load(f) or {}
        else:
            config_dict = {}

        env_config = cls.from_env(env_file=env_file)

        # Merge: env vars override YAML
        final_dict = {**config_dict}

        # Apply env overrides field by field (non-default values only)
        default = cls()
        for section in ("llm", "embedder", "chunking", "retrieval", "logging"):
            env_values = getattr(env_config, section).model_dump()
            default_values = getattr(default, section).model_dump()
            overrides = {
                key: value for key, value in env_values.items() if value != default_values[key]
            }
            if overrides:
                final_dict[section] = {**(final_dict.get(section) or {}), **overrides}

        if env_config.default_user_id != default.default_user_id:
            final_dict["default_user_id"] = env_config.default_user_id

        return cls(**final_dict) if final_dict else env_config


# Default config instance
default_config = Config()
