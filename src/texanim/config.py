"""
Consolidated configuration system for texanim.

This module provides a centralized Pydantic-based configuration system for the
texture conversion pipelines: directory layout, animation parameters for both
backends, transparency keying and external tool discovery. Every setting can be
overridden from the environment.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# PATH SETTINGS
# =============================================================================

class PathSettings(BaseModel):
    """Input and output directories for the three pipelines."""

    textures_dir: Annotated[Path, Field(
        description="Directory holding the extracted texture frames"
    )] = Path("converted/textures")

    gifs_dir: Annotated[Path, Field(
        description="Destination of animated GIFs"
    )] = Path("converted/gifs")

    transparent_dir: Annotated[Path, Field(
        description="Destination of transparent PNGs"
    )] = Path("converted/transparent")

    transparent_gifs_dir: Annotated[Path, Field(
        description="Destination of transparent animated GIFs"
    )] = Path("converted/transparent-gifs")


# =============================================================================
# SEQUENCE SETTINGS
# =============================================================================

class SequenceSettings(BaseModel):
    """Configuration for frame sequence discovery."""

    frame_ext: Annotated[str, Field(
        description="Extension of the input frames"
    )] = ".png"

    min_sequence_frames: Annotated[int, Field(
        ge=2,
        description="Minimum number of frames required to constitute a sequence"
    )] = 2

    preview_limit: Annotated[int, Field(
        ge=0,
        description="Number of discovered sequences listed before the run starts"
    )] = 10

    @field_validator("frame_ext")
    @classmethod
    def validate_extension_format(cls, v):
        """Ensure extension starts with dot."""
        if not v.startswith("."):
            raise ValueError(f"Extension must start with dot, got: {v}")
        return v.lower()


# =============================================================================
# ANIMATION SETTINGS
# =============================================================================

class AnimationSettings(BaseModel):
    """Animation parameters shared by the ImageMagick and FFmpeg backends."""

    model_config = ConfigDict(frozen=True)

    delay: Annotated[int, Field(
        ge=0,
        description="ImageMagick inter-frame delay in ticks (1/100 s)"
    )] = 10

    loop: Annotated[int, Field(
        ge=0,
        description="Loop count, 0 loops forever"
    )] = 0

    dispose: Annotated[str, Field(
        description="ImageMagick frame disposal method"
    )] = "previous"

    optimize: Annotated[bool, Field(
        description="Coalesce frames and optimize layers (ImageMagick)"
    )] = True

    fps: Annotated[int, Field(
        ge=1,
        le=100,
        description="Frame rate used by the FFmpeg palette passes"
    )] = 10

    scale_width: Annotated[int, Field(
        gt=0,
        description="Output width of the FFmpeg passes, height keeps aspect"
    )] = 320

    scale_flags: Annotated[str, Field(
        description="FFmpeg scaler algorithm"
    )] = "lanczos"

    preserve_alpha: Annotated[bool, Field(
        description="Reserve a transparent palette entry in the FFmpeg passes"
    )] = False

    transparency_color: Annotated[str, Field(
        description="Colour stored in the reserved transparent palette slot"
    )] = "ffffff"

    alpha_threshold: Annotated[int, Field(
        ge=0,
        le=255,
        description="Alpha value below which FFmpeg emits a transparent pixel"
    )] = 128


class TransparentGifSettings(AnimationSettings):
    """Animation parameters of the transparent GIF pipeline: slower, alpha kept."""

    delay: Annotated[int, Field(ge=0)] = 20
    optimize: bool = False
    fps: Annotated[int, Field(ge=1, le=100)] = 5
    preserve_alpha: bool = True


# =============================================================================
# TRANSPARENCY SETTINGS
# =============================================================================

class TransparencySettings(BaseModel):
    """Near-black keying parameters for both backends."""

    fuzz_percent: Annotated[float, Field(
        ge=0.0,
        le=100.0,
        description="ImageMagick -fuzz tolerance in percent"
    )] = 5.0

    key_color: Annotated[str, Field(
        description="ImageMagick colour made transparent"
    )] = "black"

    colorkey_color: Annotated[str, Field(
        description="FFmpeg colorkey colour"
    )] = "0x000000"

    similarity: Annotated[float, Field(
        gt=0.0,
        le=1.0,
        description="FFmpeg colorkey similarity"
    )] = 0.1

    blend: Annotated[float, Field(
        ge=0.0,
        le=1.0,
        description="FFmpeg colorkey blend"
    )] = 0.1


# =============================================================================
# TOOL SETTINGS
# =============================================================================

DEFAULT_MAGICK_SEARCH_PATHS = [
    Path("C:\\Program Files\\ImageMagick-7.1.2-Q16-HDRI\\magick.exe"),
    Path("C:\\Program Files\\ImageMagick-7.1.1-Q16-HDRI\\magick.exe"),
    Path("C:\\Program Files\\ImageMagick-7.1.0-Q16-HDRI\\magick.exe"),
    Path("C:\\Program Files\\ImageMagick\\magick.exe"),
    Path("C:\\ImageMagick\\magick.exe"),
]


class ToolSettings(BaseModel):
    """External tool names, discovery locations and timeouts."""

    magick_command: str = "magick"
    legacy_magick_command: str = "convert"
    ffmpeg_command: str = "ffmpeg"

    magick_path: Annotated[Path | None, Field(
        description="Explicit ImageMagick executable (MAGICK_PATH)"
    )] = None

    search_paths: Annotated[list[Path], Field(
        description="Well-known ImageMagick installation paths, checked in order"
    )] = DEFAULT_MAGICK_SEARCH_PATHS

    version_timeout_sec: Annotated[int, Field(
        gt=0,
        description="Timeout in seconds for each -version check"
    )] = 10

    timeout_sec: Annotated[int, Field(
        gt=0,
        description="Timeout in seconds for each conversion subprocess"
    )] = 300


# =============================================================================
# MAIN APPLICATION CONFIGURATION
# =============================================================================

class AppConfig(BaseSettings):
    """
    Main application configuration with environment variable support.

    All settings can be overridden via environment variables with TEXANIM_ prefix.
    Example: TEXANIM_GIF__DELAY=8

    The ImageMagick executable is also read from the bare MAGICK_PATH variable.
    """

    model_config = SettingsConfigDict(
        env_prefix="TEXANIM_",
        env_ignore_empty=True,
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    paths: PathSettings = PathSettings()
    sequence: SequenceSettings = SequenceSettings()
    gif: AnimationSettings = AnimationSettings()
    transparent_gif: TransparentGifSettings = TransparentGifSettings()
    transparency: TransparencySettings = TransparencySettings()
    tools: ToolSettings = ToolSettings()

    magick_path: Annotated[Path | None, Field(
        validation_alias="MAGICK_PATH",
        description="Explicit ImageMagick executable"
    )] = None

    @field_validator("magick_path", mode="before")
    @classmethod
    def blank_path_is_unset(cls, v):
        """An empty MAGICK_PATH means no explicit executable."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def resolved_tools(self) -> ToolSettings:
        """Tool settings with MAGICK_PATH folded in."""
        if self.magick_path is None or self.tools.magick_path is not None:
            return self.tools
        return self.tools.model_copy(update={"magick_path": self.magick_path})


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def create_config_from_env() -> AppConfig:
    """Create a new configuration instance from environment variables."""
    return AppConfig()
