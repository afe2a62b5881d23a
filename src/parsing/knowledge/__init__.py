from .knowledge_base import (
    AirportRecord,
    CountryRecord,
    CityAlias,
    KnowledgeBase,
    load_knowledge_base,
    load_knowledge_base_file,
)

__all__ = [
    "AirportRecord",
    "CountryRecord",
    "CityAlias",
    "KnowledgeBase",
    "load_knowledge_base",
    "load_knowledge_base_file",
]
