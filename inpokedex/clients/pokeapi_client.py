import json
import logging
from typing import Any
from urllib.parse import urlencode

import httpx
import redis.asyncio as aioredis
from redis.exceptions import RedisError

from inpokedex.errors import APIClientError

logger = logging.getLogger(__name__)


class PokeAPIClient:
    BASE_URL = "https://pokeapi.co/api/v2"
    CACHE_TTL = 3600  # 1 hour
    CACHE_PREFIX = "pokeapi:"

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = 5.0,
        redis_url: str | None = None,
        cache_ttl: int = CACHE_TTL,
    ):
        self.client = httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self.cache_ttl = cache_ttl
        # Response caching is opt-in; without a Redis URL every call goes upstream
        self.redis = aioredis.from_url(redis_url, decode_responses=True) if redis_url else None

    def _cache_key(self, url: str, params: dict | None) -> str:
        key = f"{self.CACHE_PREFIX}{url}"
        if params:
            key += "?" + urlencode(sorted(params.items()))
        return key

    async def _cache_get(self, cache_key: str) -> Any | None:
        if self.redis is None:
            return None
        try:
            cached_data = await self.redis.get(cache_key)
        except RedisError as e:
            logger.warning(f"Cache read failed for {cache_key}, going upstream: {e}")
            return None
        if cached_data:
            logger.info(f"Cache hit for {cache_key}")
            return json.loads(cached_data)
        logger.info(f"Cache miss for {cache_key}")
        return None

    async def _cache_set(self, cache_key: str, data: Any) -> None:
        if self.redis is None:
            return
        try:
            await self.redis.setex(cache_key, self.cache_ttl, json.dumps(data))
        except RedisError as e:
            logger.warning(f"Cache write failed for {cache_key}: {e}")

    async def _get_json(self, url: str, params: dict | None = None) -> Any:
        """Internal method to GET one PokeAPI resource with caching and error handling."""
        cache_key = self._cache_key(url, params)
        cached_data = await self._cache_get(cache_key)
        if cached_data is not None:
            return cached_data

        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"PokeAPI {url} failed with status {e.response.status_code}")
            raise APIClientError(
                status_code=e.response.status_code,
                detail=f"PokeAPI failed with status {e.response.status_code} for {url}",
            )
        except httpx.RequestError as e:
            logger.error(f"PokeAPI network error for {url}: {str(e)}")
            raise APIClientError(status_code=None, detail=f"PokeAPI network error: {str(e)}")

        try:
            data = response.json()
        except ValueError:
            logger.error(f"PokeAPI {url} returned a non-JSON body")
            raise APIClientError(status_code=response.status_code, detail=f"PokeAPI returned a non-JSON body for {url}")

        # Only successful results get cached
        await self._cache_set(cache_key, data)
        return data

    async def list_types(self, limit: int) -> dict:
        return await self._get_json("/type", params={"limit": limit})

    async def get_type(self, url_or_name: str) -> dict:
        """Fetches a type detail, either by the absolute URL from a listing or by name."""
        if url_or_name.startswith(("http://", "https://")):
            return await self._get_json(url_or_name)
        return await self._get_json(f"/type/{url_or_name.lower()}")

    async def list_pokemon(self, offset: int, limit: int) -> dict:
        return await self._get_json("/pokemon", params={"offset": offset, "limit": limit})

    async def get_pokemon(self, pokemon_id: str) -> dict:
        return await self._get_json(f"/pokemon/{pokemon_id}")

    async def get_pokemon_species(self, pokemon_id: str) -> dict:
        return await self._get_json(f"/pokemon-species/{pokemon_id}")

    async def clear_cache(self):
        """Clear the PokeAPI response cache. Useful for testing."""
        if self.redis is None:
            return
        keys = await self.redis.keys(f"{self.CACHE_PREFIX}*")
        if keys:
            await self.redis.delete(*keys)

    async def close(self):
        """Close the HTTP client and Redis connection (call on app shutdown)."""
        await self.client.aclose()
        if self.redis is not None:
            await self.redis.aclose()
