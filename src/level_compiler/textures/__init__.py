"""Runtime texture generation."""

from .sign import GeneratedTexture, SignTextureGenerator

__all__ = ["GeneratedTexture", "SignTextureGenerator"]
