from .abc_inventory import AbcInventoryPipeline

__all__ = ["AbcInventoryPipeline"]
