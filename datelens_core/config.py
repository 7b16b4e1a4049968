"""
Configuration Management Module
===============================

Centralized configuration for the DateLens validation and enrichment core.
Supports YAML files, environment variables, and programmatic configuration.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Optional, Dict, Any, List

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# Configuration Classes (Pydantic Models)
# =============================================================================

class DetectionConfig(BaseModel):
    """Face detection model configuration."""

    model_config = ConfigDict(protected_namespaces=())

    enabled: bool = Field(
        default=True,
        description="Use the face detection model (heuristics only when False)"
    )
    model: str = Field(
        default="yolov8n-face",
        description="Detection model name or path"
    )
    model_path: Optional[str] = Field(
        default=None,
        description="Custom model path (overrides model name)"
    )
    confidence_threshold: float = Field(
        default=0.25,
        ge=0.0, le=1.0,
        description="Minimum confidence for a candidate face box"
    )
    nms_threshold: float = Field(
        default=0.4,
        ge=0.0, le=1.0,
        description="Non-maximum suppression threshold"
    )
    min_face_size: int = Field(
        default=20,
        ge=1,
        description="Minimum face size in pixels"
    )
    max_faces: int = Field(
        default=20,
        ge=1,
        description="Maximum number of faces to report per image"
    )
    device: str = Field(
        default="auto",
        description="Compute device (auto, cuda, mps, cpu)"
    )
    input_size: tuple[int, int] = Field(
        default=(640, 640),
        description="Model input size (width, height)"
    )


class SegmentationConfig(BaseModel):
    """Person segmentation model configuration."""

    model_config = ConfigDict(protected_namespaces=())

    enabled: bool = Field(
        default=True,
        description="Use the person segmentation model"
    )
    model: str = Field(
        default="yolov8n-seg",
        description="Segmentation model name or path"
    )
    model_path: Optional[str] = Field(
        default=None,
        description="Custom model path (overrides model name)"
    )
    confidence_threshold: float = Field(
        default=0.35,
        ge=0.0, le=1.0,
        description="Minimum confidence for a person instance"
    )
    device: str = Field(
        default="auto",
        description="Compute device (auto, cuda, mps, cpu)"
    )
    input_size: tuple[int, int] = Field(
        default=(640, 640),
        description="Model input size (width, height)"
    )


class ValidationConfig(BaseModel):
    """Human validation gate configuration."""

    face_confidence_threshold: float = Field(
        default=0.7,
        ge=0.0, le=1.0,
        description="Face probability that must be exceeded to confirm a human"
    )
    skin_tone_threshold: float = Field(
        default=0.05,
        ge=0.0, le=1.0,
        description="Skin-tone pixel ratio that must be exceeded in heuristic mode"
    )
    heuristic_confidence_scale: float = Field(
        default=8.0,
        gt=0.0,
        description="Multiplier turning skin ratio into a confidence"
    )
    heuristic_confidence_cap: float = Field(
        default=0.8,
        ge=0.0, le=1.0,
        description="Ceiling on heuristic confidence"
    )
    inference_timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="Timeout in seconds for a single model call, including load"
    )
    remove_background: bool = Field(
        default=True,
        description="Produce a background cut-out when a person mask exists"
    )


class SynthesisConfig(BaseModel):
    """Synthetic profile generation configuration."""

    min_results: int = Field(
        default=1,
        ge=1,
        description="Minimum number of records for a positive search"
    )
    max_results: int = Field(
        default=3,
        ge=1,
        description="Maximum number of records for a positive search"
    )
    photo_pool: str = Field(
        default="generic",
        description="Profile pool used for photo searches"
    )
    phone_pool: str = Field(
        default="africa",
        description="Profile pool used for phone searches"
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for the random source (None for nondeterministic)"
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "SynthesisConfig":
        if self.min_results > self.max_results:
            raise ValueError(
                f"min_results ({self.min_results}) exceeds max_results ({self.max_results})"
            )
        return self


class PhoneConfig(BaseModel):
    """Phone number parsing configuration."""

    min_digits: int = Field(
        default=10,
        ge=1,
        description="Minimum digit count of a valid number"
    )
    max_digits: int = Field(
        default=15,
        ge=1,
        description="Maximum digit count of a valid number"
    )
    simulated_latency: float = Field(
        default=0.0,
        ge=0.0,
        description="Artificial delay in seconds before phone results are produced"
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "PhoneConfig":
        if self.min_digits > self.max_digits:
            raise ValueError(
                f"min_digits ({self.min_digits}) exceeds max_digits ({self.max_digits})"
            )
        return self


class UIConfig(BaseModel):
    """Streamlit front end configuration."""

    page_title: str = Field(default="DateLens - Profile Search")
    max_upload_size_mb: float = Field(
        default=10.0,
        ge=0.1,
        description="Maximum accepted upload size in MB"
    )
    allowed_formats: List[str] = Field(
        default=["jpg", "jpeg", "png", "webp"],
        description="Accepted image formats"
    )


# =============================================================================
# Master System Configuration
# =============================================================================

class SystemConfig(BaseSettings):
    """Master system configuration combining all modules."""

    model_config = SettingsConfigDict(
        env_prefix="DATELENS_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Project metadata
    project_name: str = Field(default="DateLens")
    version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Device
    device: str = Field(
        default="auto",
        description="Global compute device (auto, cuda, mps, cpu)"
    )

    # Paths
    models_dir: str = Field(default="./models")

    # Sub-configurations
    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    segmentation: SegmentationConfig = Field(default_factory=SegmentationConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    synthesis: SynthesisConfig = Field(default_factory=SynthesisConfig)
    phone: PhoneConfig = Field(default_factory=PhoneConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    def model_post_init(self, __context: Any) -> None:
        """Post-initialization to sync device settings."""
        if self.device != "auto":
            # Propagate device setting to sub-configs
            if self.detection.device == "auto":
                self.detection.device = self.device
            if self.segmentation.device == "auto":
                self.segmentation.device = self.device

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    def save_yaml(self, path: str | Path) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = self.model_dump(mode="json")
        with open(path, 'w') as f:
            yaml.dump(data, f, default_flow_style=False, indent=2, sort_keys=False)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SystemConfig":
        """Load configuration from YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)


# =============================================================================
# Utility Functions
# =============================================================================

def load_config(path: Optional[str | Path] = None) -> SystemConfig:
    """
    Load system configuration from file or environment.

    Args:
        path: Path to YAML configuration file.
              If None, checks DATELENS_CONFIG_PATH env var, then uses defaults.

    Returns:
        SystemConfig instance

    Example:
        >>> config = load_config("configs/default.yaml")
        >>> config = load_config()  # Uses env var or defaults
    """
    if path is not None:
        return SystemConfig.from_yaml(path)

    env_path = os.environ.get("DATELENS_CONFIG_PATH")
    if env_path and Path(env_path).exists():
        return SystemConfig.from_yaml(env_path)

    return SystemConfig()


# Lazy-loaded default config
_default_config: Optional[SystemConfig] = None
_default_config_lock = threading.Lock()


def get_default_config() -> SystemConfig:
    """Get the default configuration (lazy-loaded singleton)."""
    global _default_config
    with _default_config_lock:
        if _default_config is None:
            _default_config = load_config()
        return _default_config
