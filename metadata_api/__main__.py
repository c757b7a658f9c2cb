import uvicorn

from metadata_api.config import settings
from metadata_api.main import app


def main() -> None:
    # uvicorn exits non-zero if the port cannot be bound
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
