"""Digital closet: wardrobe storage, garment ingestion and outfit composition."""

__version__ = "0.1.0"
