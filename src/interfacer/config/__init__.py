from .loader import InterfacerConfig, load_config_from_path

__all__ = ["InterfacerConfig", "load_config_from_path"]
