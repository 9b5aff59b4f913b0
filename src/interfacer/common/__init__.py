from .messaging.bus import bus

__all__ = ["bus"]
