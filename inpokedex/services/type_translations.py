import asyncio
import logging
from types import MappingProxyType
from typing import Mapping

from inpokedex.clients.pokeapi_client import PokeAPIClient

logger = logging.getLogger(__name__)


def _label_in(names: list[dict], language: str) -> str | None:
    return next(
        (entry["name"] for entry in names if entry["language"]["name"] == language),
        None,
    )


class TypeTranslations:
    """
    Read-only map from a PokeAPI type key ("fire") to its localized label ("불꽃").

    Built once during application startup by `load()` and shared by every
    request afterwards. Lookups never fail: an unknown key comes back as-is.
    """

    def __init__(self, labels: Mapping[str, str] | None = None, language: str = "ko"):
        self._labels = MappingProxyType(dict(labels or {}))
        self.language = language

    @classmethod
    async def load(cls, client: PokeAPIClient, language: str, limit: int = 18) -> "TypeTranslations":
        """
        Enumerates the types and fetches every type's detail concurrently.
        A failed enumeration leaves the translations empty; a failed type is
        only left out. Callers fall back to raw keys either way.
        """
        logger.info(f"Loading type translations for language '{language}'...")
        try:
            listing = await client.list_types(limit)
            types = [(t["name"], t["url"]) for t in listing["results"]]
        except Exception as e:
            logger.error(f"Failed to load type translations: {e}")
            return cls({}, language)

        details = await asyncio.gather(*(client.get_type(url) for _, url in types), return_exceptions=True)

        labels = {}
        for (name, _), detail in zip(types, details):
            if isinstance(detail, Exception):
                logger.error(f"Failed to load translation for type '{name}': {detail}")
                continue
            try:
                label = _label_in(detail.get("names", []), language)
            except (KeyError, TypeError, AttributeError) as e:
                logger.error(f"Unexpected payload for type '{name}': {e!r}")
                continue
            if label:
                labels[name] = label

        logger.info(f"Loaded {len(labels)} type translations")
        return cls(labels, language)

    def label_for(self, key: str) -> str:
        return self._labels.get(key, key)

    def as_dict(self) -> dict[str, str]:
        return dict(self._labels)

    def __contains__(self, key: object) -> bool:
        return key in self._labels

    def __len__(self) -> int:
        return len(self._labels)
