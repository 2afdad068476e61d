"""Camera, raw volume loading and uniform packing for GPU volume ray casting."""

__version__ = "0.1.0"
__all__ = ["camera", "volume", "frame"]