from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from .env file.

    Every field carries a safe default so the selector works without any
    environment at all. Only the embedder reads the embedding_* fields.
    """

    # Embedding
    embedding_model: str = "TaylorAI/bge-micro-v2"
    # "auto" picks CUDA when available, else CPU
    embedding_device: str = "auto"
    embedding_max_seq_length: int = 512
    embedding_batch_size: int = 32
    # Check free space in the HuggingFace cache before the first download
    embedding_check_disk_space: bool = True

    # Search defaults used by SimilarityQuery
    search_max_results: int = 10
    search_min_similarity: float | None = None

    # Logging
    log_level: str = "INFO"

    # Pydantic v2 configuration: accept extra env vars and set env file
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
