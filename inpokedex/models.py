from pydantic import BaseModel, ConfigDict, Field


# Model for one card of the list endpoint (Public Contract)
class PokemonSummary(BaseModel):
    # Python attribute names, camelCase JSON keys the grid already reads
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    types: list[str]
    animated_image_url: str | None = Field(default=None, alias="animatedImageUrl")
    default_image_url: str | None = Field(default=None, alias="defaultImageUrl")


# Model for the list endpoint response (Public Endpoint 1)
class PokemonPage(BaseModel):
    count: int
    results: list[PokemonSummary]


# One entry of the detail endpoint's rewritten "types" field
class TypeLabel(BaseModel):
    key: str
    label: str


# Error body for every 500
class ErrorMessage(BaseModel):
    message: str
