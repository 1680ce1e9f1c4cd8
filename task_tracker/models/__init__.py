from .task import Task

# Export all models for easy importing
__all__ = ["Task"]
