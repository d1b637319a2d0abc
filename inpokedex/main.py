import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from inpokedex.clients import PokeAPIClient
from inpokedex.config import Settings, configure_logging
from inpokedex.dependencies import get_pokedex_service, get_settings
from inpokedex.errors import PokedexError
from inpokedex.models import ErrorMessage, PokemonPage
from inpokedex.services import PokedexService, TypeTranslations

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _parse_int(value: str | None, default: int) -> int:
    """Query values that are missing or not integers fall back to the default."""
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _error_response(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorMessage(message=message).model_dump(),
    )


# Endpoint 1: Paginated Pokemon cards
@router.get(
    "/items",
    response_model=PokemonPage,
    responses={500: {"model": ErrorMessage}},
    summary="Returns one page of localized Pokemon cards",
)
@router.get("/pokemons", response_model=PokemonPage, include_in_schema=False)
async def get_pokemon_page(
    offset: str | None = None,
    limit: str | None = None,
    service: PokedexService = Depends(get_pokedex_service),
    settings: Settings = Depends(get_settings),
):
    """Fetches a page of Pokemon with localized names and type labels, plus the upstream total count."""
    page_offset = max(_parse_int(offset, 0), 0)
    page_limit = _parse_int(limit, settings.default_limit)
    if page_limit <= 0:
        page_limit = settings.default_limit

    logger.info(f"Pokemon page requested: offset={page_offset}, limit={page_limit}")
    try:
        return await service.fetch_page(offset=page_offset, limit=page_limit)
    except PokedexError as e:
        logger.error(f"Failed to fetch pokemons (offset={page_offset}, limit={page_limit}): {e.detail}")
        return _error_response("Failed to fetch pokemons")


# Endpoint 2: Single Pokemon detail
@router.get(
    "/item/{pokemon_id}",
    responses={500: {"model": ErrorMessage}},
    summary="Returns the full Pokemon payload with localized name and types",
)
@router.get("/pokemon/{pokemon_id}", include_in_schema=False)
async def get_pokemon_detail(
    pokemon_id: str,
    service: PokedexService = Depends(get_pokedex_service),
):
    logger.info(f"Pokemon detail requested: {pokemon_id}")
    try:
        return await service.fetch_detail(pokemon_id)
    except PokedexError as e:
        logger.error(f"Failed to fetch pokemon {pokemon_id}: {e.detail}")
        return _error_response(f"Failed to fetch pokemon {pokemon_id}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)

    if getattr(app.state, "poke_client", None) is None:
        app.state.poke_client = PokeAPIClient(
            base_url=settings.pokeapi_base_url,
            timeout=settings.upstream_timeout,
            redis_url=settings.redis_url,
            cache_ttl=settings.cache_ttl,
        )

    # Routes only become reachable once this returns, so no request sees a half-built map
    app.state.type_translations = await TypeTranslations.load(
        app.state.poke_client,
        language=settings.language,
        limit=settings.type_list_limit,
    )
    yield

    await app.state.poke_client.close()
    app.state.poke_client = None


def create_app(settings: Settings | None = None, poke_client: PokeAPIClient | None = None) -> FastAPI:
    app = FastAPI(
        title="InPokeDex API",
        description="Localized PokeAPI relay backing the InPokeDex infinite-scroll grid.",
        lifespan=lifespan,
    )
    app.state.settings = settings or Settings()
    app.state.poke_client = poke_client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root():
        return "Hello from InPokeDex backend!"

    app.include_router(router)
    return app
