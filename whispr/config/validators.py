"""Configuration validation schemas using Pydantic."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

SUPPORTED_ENCODINGS = ("int16", "uint16", "float32")


class AudioConfig(BaseModel):
    """Audio capture configuration validation."""

    sample_encoding: Optional[str] = Field(
        default=None, description="Override for the host default input dtype"
    )
    default_duration: int = Field(
        default=5, description="Default capture duration in seconds"
    )
    buffer_size_limit: int = Field(
        default=100, description="Maximum capture buffer size in MB (0 disables)"
    )
    lock_timeout: float = Field(
        default=0.05, description="Longest wait for the buffer lock in the callback"
    )

    @field_validator("sample_encoding")
    @classmethod
    def validate_encoding(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if v.lower() not in SUPPORTED_ENCODINGS:
            raise ValueError(f"Sample encoding must be one of: {SUPPORTED_ENCODINGS}")
        return v.lower()

    @field_validator("default_duration")
    @classmethod
    def validate_duration(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Capture duration must be positive")
        return v

    @field_validator("buffer_size_limit")
    @classmethod
    def validate_buffer_limit(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Buffer size limit cannot be negative")
        if v > 1000:  # 1GB max
            raise ValueError("Buffer size limit cannot exceed 1GB")
        return v

    @field_validator("lock_timeout")
    @classmethod
    def validate_lock_timeout(cls, v: float) -> float:
        if v <= 0 or v > 1:
            raise ValueError("Lock timeout must be between 0 and 1 second")
        return v


class ASRConfig(BaseModel):
    """Speech recognition configuration validation."""

    model: str = Field(default="base.en", description="faster-whisper model name or path")
    device: str = Field(default="auto", description="Inference device")
    compute_type: str = Field(default="int8", description="CTranslate2 compute type")
    beam_size: int = Field(default=1, description="Beam size (1 is greedy)")
    language: str = Field(default="en", description="Language hint")

    @field_validator("device")
    @classmethod
    def validate_device(cls, v: str) -> str:
        valid_devices = ("auto", "cpu", "cuda")
        if v not in valid_devices:
            raise ValueError(f"ASR device must be one of: {valid_devices}")
        return v

    @field_validator("beam_size")
    @classmethod
    def validate_beam_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Beam size must be at least 1")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration validation."""

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log record format",
    )
    directory: str = Field(default="logs", description="Log file directory")
    to_file: bool = Field(default=True, description="Write daily log files")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


class WhisprConfig(BaseModel):
    """Main Whispr configuration validation."""

    app: Dict[str, Any] = Field(default_factory=dict)
    audio: AudioConfig = Field(default_factory=AudioConfig)
    asr: ASRConfig = Field(default_factory=ASRConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "extra": "allow",
        "validate_assignment": True,
    }


def validate_config(config_dict: Dict[str, Any]) -> WhisprConfig:
    """Validate configuration dictionary using Pydantic schemas.

    Args:
        config_dict: Configuration dictionary to validate

    Returns:
        Validated WhisprConfig instance

    Raises:
        ValueError: If configuration validation fails
    """
    try:
        return WhisprConfig(**config_dict)
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")


def default_config() -> Dict[str, Any]:
    """Return the validated defaults as a plain dictionary."""
    return WhisprConfig().model_dump()
