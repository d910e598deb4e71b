from .loader import ConfigError, ImporterConfig, apply_env_overrides, load_config

__all__ = [
    "ConfigError",
    "ImporterConfig",
    "apply_env_overrides",
    "load_config",
]
