from .blocks import router as blocks_router

__all__ = ['blocks_router']
