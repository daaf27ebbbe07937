from .store import CollectionStore, Section, SectionedCollection

__all__ = ["CollectionStore", "Section", "SectionedCollection"]
