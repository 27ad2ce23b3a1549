"""LoRaWAN end-device building blocks: payload encodings, tick timebase, job scheduling, radio parameters, regional constants and US-like channel plans."""

__version__ = "0.1.0"
__all__ = ["encoding", "timebase", "scheduler", "lorabase", "regions", "uslike"]