"""Application entry point for LearnHub backend server."""

from learnhub.app import App
from learnhub.config import Config
from learnhub.logging import setup_logging
from learnhub.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
