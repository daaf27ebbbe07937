from .models import IndexPath, LoadKind, SortDescriptor, SortOrder

__all__ = ["IndexPath", "LoadKind", "SortDescriptor", "SortOrder"]
