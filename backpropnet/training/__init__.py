"""Training loop, configuration and presets."""

from .config import NetworkConfig
from .losses import REGISTRY as LOSS_REGISTRY
from .pipelines import load_preset, presets, run_pipeline
from .trainer import Trainer

__all__ = ["LOSS_REGISTRY", "NetworkConfig", "Trainer", "load_preset", "presets", "run_pipeline"]
