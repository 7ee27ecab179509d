"""
Configuration management for rasterops.

Operators take their parameters as plain arguments; this module only
stores named parameter sets in JSON files so drivers can keep them outside code.
"""

import json
from dataclasses import dataclass, field, asdict
from fractions import Fraction
from pathlib import Path
from typing import Any


@dataclass
class EdgeSettings:
    """Sobel edge detector settings."""
    threshold: int = 150


@dataclass
class ConvolutionSettings:
    """Sharpen filter settings."""
    policy: str = "clamp"  # "clamp", "drop" or "strict"


@dataclass
class WarpSettings:
    """Piecewise warp settings. Slopes may be strings such as "1/3"."""
    breakpoints: list[int] = field(default_factory=lambda: [100, 400])
    slopes: list[Any] = field(default_factory=lambda: [2, "1/3", 1])
    intercepts: list[Any] = field(default_factory=lambda: [0, 200, 300])
    out_of_range: str = "clamp"  # "clamp" or "fail"


@dataclass
class ChromaKeySettings:
    """Chroma-key compositing settings."""
    offset_x: int = 0
    offset_y: int = 0


@dataclass
class BlendSettings:
    """Cross-fade settings."""
    frames: int = 200


@dataclass
class OperatorConfig:
    """
    Main configuration container.

    Example:
        config = OperatorConfig.load("rasterops.json")
        edges = apply_operation("edges", buffer, **config.operation_params("edges"))
    """
    edges: EdgeSettings = field(default_factory=EdgeSettings)
    sharpen: ConvolutionSettings = field(default_factory=ConvolutionSettings)
    warp: WarpSettings = field(default_factory=WarpSettings)
    chroma_key: ChromaKeySettings = field(default_factory=ChromaKeySettings)
    blend: BlendSettings = field(default_factory=BlendSettings)

    @classmethod
    def load(cls, path: str | Path) -> "OperatorConfig":
        """Load configuration from a JSON file."""
        return load_config(path)

    def save(self, path: str | Path) -> None:
        """Save configuration to a JSON file."""
        save_config(self, path)

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        data = {
            "edges": asdict(self.edges),
            "sharpen": asdict(self.sharpen),
            "warp": asdict(self.warp),
            "chroma_key": asdict(self.chroma_key),
            "blend": asdict(self.blend),
        }
        # Fractions are stored as "num/den" strings
        for key in ("slopes", "intercepts"):
            data["warp"][key] = [
                str(v) if isinstance(v, Fraction) else v for v in data["warp"][key]
            ]
        return data

    def operation_params(self, name: str) -> dict[str, Any]:
        """
        Keyword arguments for a registered operation.

        Operations without settings get an empty dict.
        """
        if name == "edges":
            return {"threshold": self.edges.threshold}
        if name == "sharpen":
            return {"policy": self.sharpen.policy}
        if name == "warp":
            return {
                "breakpoints": tuple(self.warp.breakpoints),
                "slopes": tuple(Fraction(str(s)) for s in self.warp.slopes),
                "intercepts": tuple(Fraction(str(i)) for i in self.warp.intercepts),
                "out_of_range": self.warp.out_of_range,
            }
        return {}


def load_config(path: str | Path) -> OperatorConfig:
    """
    Load configuration from a JSON file.

    Missing sections and keys fall back to their defaults.

    Args:
        path: Path to the JSON configuration file

    Returns:
        Parsed OperatorConfig object

    Raises:
        FileNotFoundError: If the config file doesn't exist
        json.JSONDecodeError: If the JSON is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    edges = data.get("edges", {})
    sharpen = data.get("sharpen", {})
    warp = data.get("warp", {})
    chroma = data.get("chroma_key", {})
    blend = data.get("blend", {})
    defaults = WarpSettings()

    return OperatorConfig(
        edges=EdgeSettings(threshold=edges.get("threshold", 150)),
        sharpen=ConvolutionSettings(policy=sharpen.get("policy", "clamp")),
        warp=WarpSettings(
            breakpoints=warp.get("breakpoints", defaults.breakpoints),
            slopes=warp.get("slopes", defaults.slopes),
            intercepts=warp.get("intercepts", defaults.intercepts),
            out_of_range=warp.get("out_of_range", "clamp"),
        ),
        chroma_key=ChromaKeySettings(
            offset_x=chroma.get("offset_x", 0),
            offset_y=chroma.get("offset_y", 0),
        ),
        blend=BlendSettings(frames=blend.get("frames", 200)),
    )


def save_config(config: OperatorConfig, path: str | Path) -> None:
    """
    Save configuration to a JSON file.

    Args:
        config: Configuration object to save
        path: Output path for the JSON file
    """
    path = Path(path)
    with open(path, "w") as f:
        json.dump(config.to_dict(), f, indent=2)
