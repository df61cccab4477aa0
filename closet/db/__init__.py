"""Persistence layer for clothing items and outfits."""
