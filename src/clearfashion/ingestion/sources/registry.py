from typing import Dict, Mapping, Optional

from ...config.settings import SOURCES
from .base import Source, SourceConfig
from .dedicatedbrand import DedicatedBrandSource

SOURCE_KINDS = {
    "dedicatedbrand": DedicatedBrandSource,
}


def build_source(name: str, sources: Optional[Mapping[str, Dict]] = None, session=None) -> Source:
    sources = SOURCES if sources is None else sources
    if name not in sources:
        available = ", ".join(sorted(sources))
        raise ValueError(f"unknown source '{name}' (available: {available})")

    entry = dict(sources[name])
    kind = entry.pop("kind")
    cls = SOURCE_KINDS.get(kind)
    if cls is None:
        raise ValueError(f"source '{name}' has unknown kind '{kind}'")
    return cls(SourceConfig(name=name, **entry), session=session)
