"""
Dataset generation settings.
"""
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Generator settings (override with CANFUZZ_* env vars or .env)"""

    # Output
    output_path: str = "Fuzzy_dataset.csv"

    # Exact label counts
    normal_count: int = 3_347_013
    injected_count: int = 491_847

    # Injected IDs are drawn from this inclusive range (outside the signal table)
    injected_id_min: int = 0x206
    injected_id_max: int = 0x2FF

    # Reproducibility (None = fresh OS entropy)
    seed: Optional[int] = None

    # Writer
    chunk_size: int = 100_000
    show_progress: bool = True

    log_level: str = "INFO"

    @property
    def total_count(self) -> int:
        return self.normal_count + self.injected_count

    class Config:
        env_prefix = "CANFUZZ_"
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
