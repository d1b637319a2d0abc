import logging

import httpx

logger = logging.getLogger(__name__)


class PokedexFeed:
    """
    Client-side state of the infinite-scroll grid.

    Pages are requested in increasing offset order with at most one request in
    flight. A short page marks the end of the list. Cards already shown are
    skipped by id, so a shifted upstream listing never duplicates a card.
    """

    LIMIT = 20
    # Fraction of the sentinel element that must be visible before the next page loads
    THRESHOLD = 0.55

    def __init__(self, api_base_url: str, limit: int = LIMIT, threshold: float = THRESHOLD, timeout: float = 10.0):
        self.client = httpx.AsyncClient(base_url=api_base_url, timeout=timeout)
        self.limit = limit
        self.threshold = threshold

        self.pokemons: list[dict] = []
        self.page = 0
        self.loading = False
        self.has_more = True
        self.error: str | None = None

    async def _fetch_page(self, page: int) -> list[dict]:
        offset = page * self.limit
        logger.debug(f"Requesting offset={offset}, limit={self.limit}")
        response = await self.client.get("/items", params={"offset": offset, "limit": self.limit})
        response.raise_for_status()
        return response.json()["results"]

    async def load_more(self) -> int:
        """Loads the next page. Returns how many new cards were appended."""
        if self.loading or not self.has_more:
            return 0

        self.loading = True
        self.error = None
        try:
            received = await self._fetch_page(self.page)
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.error(f"Failed to load pokemons: {e}")
            self.error = f"Failed to load pokemons: {e}"
            self.has_more = False
            return 0
        finally:
            self.loading = False

        seen = {p["id"] for p in self.pokemons}
        new_unique = [p for p in received if p["id"] not in seen]
        self.pokemons.extend(new_unique)
        self.has_more = len(received) == self.limit
        self.page += 1
        return len(new_unique)

    async def on_intersect(self, ratio: float) -> int:
        """Viewport callback for the sentinel below the grid."""
        if ratio >= self.threshold and not self.loading and self.has_more:
            return await self.load_more()
        return 0

    def status_text(self) -> str:
        if self.error:
            return f"Error while loading: {self.error}"
        if self.loading:
            return "Loading more pokemons..."
        if not self.has_more:
            return "All pokemons loaded!"
        return "..."

    @staticmethod
    def image_for(pokemon: dict) -> str | None:
        return pokemon.get("animatedImageUrl") or pokemon.get("defaultImageUrl")

    async def aclose(self):
        await self.client.aclose()
