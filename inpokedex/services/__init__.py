from .pokedex_service import PokedexService
from .type_translations import TypeTranslations

__all__ = ["PokedexService", "TypeTranslations"]
