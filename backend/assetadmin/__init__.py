"""AssetAdmin — JSON endpoints for the asset admin panel."""

__version__ = "0.1.0"
