class PokedexError(Exception):
    """Base class for failures that end a request with a 500."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class APIClientError(PokedexError):
    """PokeAPI was unreachable or answered with a non-success status."""

    def __init__(self, status_code: int | None, detail: str):
        super().__init__(f"External API Error: {detail}")
        self.status_code = status_code


class MalformedPayloadError(PokedexError):
    """PokeAPI answered, but not in the shape we read from."""
