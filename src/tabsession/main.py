"""Application entry point for TabSession backend server."""

from tabsession.app import App
from tabsession.config import Config
from tabsession.logging import setup_logging
from tabsession.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
