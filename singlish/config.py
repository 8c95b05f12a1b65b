"""Configuration management for the transliteration engine and batch pipeline."""

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


class EngineConfig(BaseModel):
    """Configuration for the conversion engine."""

    mapper: Literal["index", "trie"] = "index"
    confidence_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    max_output_expansion_factor: float = Field(
        default=3.0,
        ge=1.0,
        description="Output may never exceed this multiple of the input length",
    )
    foreign_word_allow_list: set[str] = Field(
        default_factory=set,
        description="Extra words always passed through unchanged",
    )
    use_builtin_allow_list: bool = True
    min_candidate_length: int = Field(default=3, ge=1)
    soft_length_limit: int = Field(
        default=12,
        ge=1,
        description="Words longer than this lose confidence per extra letter",
    )
    max_sinhala_run: int = Field(default=40, ge=1)
    rules_file: Optional[Path] = None
    normalize_input: bool = False

    @field_validator("foreign_word_allow_list", mode="before")
    @classmethod
    def lowercase_words(cls, v):
        """Allow-list lookups are case-insensitive."""
        if v is None:
            return set()
        return {str(word).strip().lower() for word in v if str(word).strip()}

    @field_validator("rules_file", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string to Path."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v


class InputConfig(BaseModel):
    """Configuration for batch input."""

    input_file: Optional[Path] = None
    format: Literal["txt", "jsonl"] = "txt"
    text_field: str = "text"

    @field_validator("input_file", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string to Path."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v


class OutputConfig(BaseModel):
    """Configuration for batch output."""

    output_path: Path = Path("output/transliterated.txt")
    format: Literal["txt", "jsonl", "json", "csv"] = "txt"
    include_trace: bool = False

    @field_validator("output_path", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string to Path."""
        return Path(v) if isinstance(v, str) else v


class Config(BaseModel):
    """Main configuration."""

    engine: EngineConfig = Field(default_factory=EngineConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    workers: int = Field(default=1, ge=1)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        data = self.model_dump(mode="json")
        # sets dump as lists in json mode; keep them ordered for stable files
        data["engine"]["foreign_word_allow_list"] = sorted(
            data["engine"]["foreign_word_allow_list"]
        )
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True)
