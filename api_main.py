import uvicorn

from spoti_web.api.fastapi_app import app
from spoti_web.config import API_HOST, API_PORT

__all__ = ["app", "main"]


def main() -> None:
    uvicorn.run(app, host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    main()
