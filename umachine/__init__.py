"""A Universal Machine emulator, instruction encoders and test program writer."""

__version__ = "0.1.0"
__all__ = ["segments", "instructions", "machine", "labwrite"]