"""Protocol interfaces for the price sampler."""
from .asset_source import AssetSource

__all__ = ["AssetSource"]
