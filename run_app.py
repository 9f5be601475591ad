import uvicorn

from src.config import get_settings


def main() -> None:
    """Run the FastAPI application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "src.main:app",
        host=settings.country_api_host,
        port=settings.country_api_port,
        reload=True,
    )


if __name__ == "__main__":
    main()
