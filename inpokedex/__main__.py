import uvicorn

from inpokedex.config import Settings


def main():
    settings = Settings()
    uvicorn.run(
        "inpokedex.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
