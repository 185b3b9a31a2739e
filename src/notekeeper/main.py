"""Application entry point for Notekeeper backend server."""

from notekeeper.app import App
from notekeeper.config import Config
from notekeeper.logging import setup_logging
from notekeeper.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
