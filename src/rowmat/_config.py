"""
Rowmat Config - Behaviour Configuration System

Provides property-based configuration for the matrix operations that have
a tunable side: the random source used by row sampling, and how strictly a
replacement backing buffer is checked.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Dict, Any, List
import threading

import numpy as np


# =============================================================================
# Configuration Classes
# =============================================================================

@dataclass
class SamplingConfig:
    """Configuration for row sampling."""
    seed: Optional[int] = None     # None = OS entropy
    scale: int = 100               # Draws are integers in [0, scale)


@dataclass
class ValidationConfig:
    """Configuration for buffer validation."""
    check_backing_data: bool = False   # Reject ragged buffers in set_backing_data


# =============================================================================
# Global Configuration Manager
# =============================================================================

class RowmatConfig:
    """
    Global configuration manager for rowmat.

    Configuration can be set globally or overridden within a context. The
    overrides are thread-local.

    Example:
        # Global configuration
        rowmat.config.sampling = SamplingConfig(seed=7)

        # Local configuration (context manager)
        with rowmat.config.local(validation=ValidationConfig(check_backing_data=True)):
            mat.set_backing_data(buffer)
        # Back to global config
    """

    def __init__(self):
        self._global_sampling = SamplingConfig()
        self._global_validation = ValidationConfig()

        # Sampling generator and the seed it was built from
        self._global_rng = None
        self._global_rng_seed = None

        # Thread-local storage for context overrides
        self._local = threading.local()

    # -------------------------------------------------------------------------
    # Property Accessors (with thread-local override support)
    # -------------------------------------------------------------------------

    @property
    def sampling(self) -> SamplingConfig:
        """Get sampling configuration."""
        if getattr(self._local, "sampling", None) is not None:
            return self._local.sampling
        return self._global_sampling

    @sampling.setter
    def sampling(self, value: SamplingConfig):
        """Set global sampling configuration."""
        self._global_sampling = value
        self._global_rng = None

    @property
    def validation(self) -> ValidationConfig:
        """Get validation configuration."""
        if getattr(self._local, "validation", None) is not None:
            return self._local.validation
        return self._global_validation

    @validation.setter
    def validation(self, value: ValidationConfig):
        """Set global validation configuration."""
        self._global_validation = value

    # -------------------------------------------------------------------------
    # Convenience Properties
    # -------------------------------------------------------------------------

    @property
    def seed(self) -> Optional[int]:
        """Seed of the sampling random source."""
        return self.sampling.seed

    @seed.setter
    def seed(self, value: Optional[int]):
        self._global_sampling.seed = value
        self._global_rng = None

    def rng(self) -> np.random.Generator:
        """
        Random generator for row sampling.

        The generator is built once from the sampling seed and kept, so
        successive calls continue one stream. Setting the seed or the
        sampling section, or entering ``local(sampling=...)``, starts a new
        stream. A ``local()`` block draws from its own generator.
        """
        if getattr(self._local, "sampling", None) is not None:
            seed = self._local.sampling.seed
            if getattr(self._local, "rng", None) is None or self._local.rng_seed != seed:
                self._local.rng = np.random.default_rng(seed)
                self._local.rng_seed = seed
            return self._local.rng

        seed = self._global_sampling.seed
        if self._global_rng is None or self._global_rng_seed != seed:
            self._global_rng = np.random.default_rng(seed)
            self._global_rng_seed = seed
        return self._global_rng

    # -------------------------------------------------------------------------
    # Context Manager Support
    # -------------------------------------------------------------------------

    def local(self, **kwargs) -> "_LocalConfigContext":
        """
        Create a local configuration context.

        Args:
            **kwargs: Configuration overrides (sampling, validation)

        Returns:
            Context manager
        """
        unknown = set(kwargs) - {"sampling", "validation"}
        if unknown:
            raise TypeError(f"Unknown configuration sections: {sorted(unknown)}")
        return _LocalConfigContext(self, **kwargs)

    def _set_local(self, **kwargs):
        """Set thread-local configuration."""
        for key, value in kwargs.items():
            if value is not None:
                setattr(self._local, key, value)
        if kwargs.get("sampling") is not None:
            self._local.rng = None

    def _clear_local(self, keys: List[str]):
        """Clear thread-local configuration."""
        for key in keys:
            if hasattr(self._local, key):
                setattr(self._local, key, None)
        if "sampling" in keys:
            self._local.rng = None

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset(self):
        """Reset all configurations to defaults."""
        self._global_sampling = SamplingConfig()
        self._global_validation = ValidationConfig()
        self._global_rng = None

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "sampling": {
                "seed": self.sampling.seed,
                "scale": self.sampling.scale,
            },
            "validation": {
                "check_backing_data": self.validation.check_backing_data,
            },
        }

    def __repr__(self) -> str:
        return f"RowmatConfig({self.to_dict()})"


class _LocalConfigContext:
    """Context manager for local configuration override."""

    def __init__(self, config: RowmatConfig, **kwargs):
        self._config = config
        self._kwargs = kwargs
        self._keys = list(kwargs.keys())

    def __enter__(self):
        self._config._set_local(**self._kwargs)
        return self._config

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._config._clear_local(self._keys)
        return False


# =============================================================================
# Global Instance
# =============================================================================

config = RowmatConfig()


# =============================================================================
# Convenience Functions
# =============================================================================

def get_config() -> RowmatConfig:
    """Get the global configuration instance."""
    return config


def set_seed(seed: Optional[int] = None):
    """Seed the random source used by DenseMatrix.sample()."""
    config.seed = seed


def set_validation(check_backing_data: bool = False):
    """
    Configure buffer validation.

    Args:
        check_backing_data: Reject buffers whose length is not a multiple of columns
    """
    config.validation = ValidationConfig(check_backing_data=check_backing_data)


__all__ = [
    "SamplingConfig",
    "ValidationConfig",
    "RowmatConfig",
    "config",
    "get_config",
    "set_seed",
    "set_validation",
]
