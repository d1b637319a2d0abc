from fastapi import Depends, Request

from inpokedex.clients import PokeAPIClient
from inpokedex.config import Settings
from inpokedex.services import PokedexService, TypeTranslations

# Everything below is created once in the app lifespan and kept on app.state


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_poke_client(request: Request) -> PokeAPIClient:
    return request.app.state.poke_client


def get_type_translations(request: Request) -> TypeTranslations:
    return request.app.state.type_translations


def get_pokedex_service(
    poke_client: PokeAPIClient = Depends(get_poke_client),
    type_translations: TypeTranslations = Depends(get_type_translations),
    settings: Settings = Depends(get_settings),
) -> PokedexService:
    return PokedexService(
        poke_client=poke_client,
        type_translations=type_translations,
        language=settings.language,
    )
