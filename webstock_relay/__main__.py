"""Runs the relay with uvicorn: `python -m webstock_relay`."""

import uvicorn

from .main import app


def main():
    settings = app.state.settings
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
