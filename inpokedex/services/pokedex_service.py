import asyncio
import logging
from typing import Any

from inpokedex.clients.pokeapi_client import PokeAPIClient
from inpokedex.errors import MalformedPayloadError
from inpokedex.models import PokemonPage, PokemonSummary, TypeLabel
from inpokedex.services.type_translations import TypeTranslations

logger = logging.getLogger(__name__)

# Field access on an unexpected PokeAPI payload fails with one of these
_SHAPE_ERRORS = (KeyError, TypeError, AttributeError, IndexError, ValueError)


async def gather_or_cancel(*aws) -> list:
    """Like asyncio.gather, but the first failure cancels the awaitables still running."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise


def extract_id(url: str) -> str:
    """'https://pokeapi.co/api/v2/pokemon/25/' -> '25'"""
    return url.split("/")[-2]


def localized_name(species: dict, language: str, fallback: str) -> str:
    return next(
        (entry["name"] for entry in species.get("names", []) if entry["language"]["name"] == language),
        fallback,
    )


def _dig(data: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def select_images(sprites: dict) -> tuple[str | None, str | None]:
    """
    Returns (animated, default) image URLs.

    animated: generation-V black/white animated front sprite, or None.
    default: official artwork, else the plain front sprite.
    """
    animated = _dig(sprites, "versions", "generation-v", "black-white", "animated", "front_default") or None
    default = _dig(sprites, "other", "official-artwork", "front_default") or sprites.get("front_default")
    return animated, default


class PokedexService:
    def __init__(self, poke_client: PokeAPIClient, type_translations: TypeTranslations, language: str = "ko"):
        self._poke_client = poke_client
        self._type_translations = type_translations
        self._language = language

    async def fetch_page(self, offset: int, limit: int) -> PokemonPage:
        """
        Endpoint 1: one page of Pokemon cards.
        Every card's two detail calls run concurrently with all the others; one failure fails the page.
        """
        listing = await self._poke_client.list_pokemon(offset=offset, limit=limit)
        try:
            references = listing["results"]
            count = listing["count"]
            # Results come back in listing order regardless of completion order
            results = await gather_or_cancel(*(self._summarize(ref) for ref in references))
            return PokemonPage(count=count, results=list(results))
        except _SHAPE_ERRORS as e:
            raise MalformedPayloadError(f"Unexpected PokeAPI payload for offset={offset}, limit={limit}: {e!r}") from e

    async def _summarize(self, reference: dict) -> PokemonSummary:
        pokemon_id = extract_id(reference["url"])
        pokemon, species = await gather_or_cancel(
            self._poke_client.get_pokemon(pokemon_id),
            self._poke_client.get_pokemon_species(pokemon_id),
        )

        animated, default = select_images(pokemon["sprites"])
        return PokemonSummary(
            id=pokemon_id,
            name=localized_name(species, self._language, fallback=reference["name"]),
            types=[self._type_translations.label_for(t["type"]["name"]) for t in pokemon["types"]],
            animated_image_url=animated,
            default_image_url=default,
        )

    async def fetch_detail(self, pokemon_id: str) -> dict[str, Any]:
        """
        Endpoint 2: the full PokeAPI Pokemon payload with a localized name
        and types rewritten as {key, label} pairs. All other fields pass through.
        """
        pokemon, species = await gather_or_cancel(
            self._poke_client.get_pokemon(pokemon_id),
            self._poke_client.get_pokemon_species(pokemon_id),
        )
        try:
            types = [
                TypeLabel(key=t["type"]["name"], label=self._type_translations.label_for(t["type"]["name"])).model_dump()
                for t in pokemon["types"]
            ]
            name = localized_name(species, self._language, fallback=pokemon["name"])
        except _SHAPE_ERRORS as e:
            raise MalformedPayloadError(f"Unexpected PokeAPI payload for pokemon {pokemon_id}: {e!r}") from e

        return {**pokemon, "name": name, "types": types}
