"""Run the board with uvicorn: python -m board (PORT / HOST from the environment)."""

import uvicorn

from board.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("board.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
