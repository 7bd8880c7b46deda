"""Application entry point for the MeetStats backend server."""

from meetstats.app import App
from meetstats.config import Config
from meetstats.logging import setup_logging
from meetstats.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
