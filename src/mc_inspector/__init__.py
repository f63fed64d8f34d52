"""Inspect Minecraft save folders by decoding their NBT record files."""

__version__ = "0.1.0"
