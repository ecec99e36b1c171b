import logging
import os

from paint_estimator.config import Config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(level="INFO", log_file=None):
    """
    Console logging, plus an optional file under Config.LOG_DIR so coverage
    fallbacks and pricing gaps can be reviewed after a run.
    """
    handlers = [logging.StreamHandler()]
    if log_file:
        os.makedirs(Config.LOG_DIR, exist_ok=True)
        handlers.append(logging.FileHandler(os.path.join(Config.LOG_DIR, log_file)))
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO),
                        format=LOG_FORMAT, handlers=handlers, force=True)
