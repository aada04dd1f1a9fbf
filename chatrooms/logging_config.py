import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # sqlalchemy echo is controlled by settings.DEBUG on the engine
    logging.getLogger("passlib").setLevel(logging.ERROR)
