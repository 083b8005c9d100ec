from .batches import router as batches_router

__all__ = ["batches_router"]
