import hashlib
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class TrackerConfig(BaseModel):
    use_content_hash: bool = False
    max_tracked_files: int = Field(default=1000, gt=0)
    track_all_files: bool = False
    generate_diffs: bool = True
    hash_algorithm: str = "sha256"

    @field_validator("hash_algorithm")
    @classmethod
    def validate_hash_algorithm(cls, v: str) -> str:
        if v not in hashlib.algorithms_available:
            raise ValueError(f"unknown hash algorithm: {v!r}")
        return v


class FileTrackConfig(BaseModel):
    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
