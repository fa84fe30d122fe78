from .config import BuildSettings, load_config, load_settings

__all__ = ["BuildSettings", "load_config", "load_settings"]
