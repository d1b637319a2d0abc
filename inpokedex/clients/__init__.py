"""Client modules for external API communication."""
from .pokeapi_client import PokeAPIClient
from inpokedex.errors import APIClientError

__all__ = [
    'PokeAPIClient',
    'APIClientError'
]
