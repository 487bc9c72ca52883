import logging
from typing import Optional

from patent_search.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure application logging (a single handler on the root logger).

    Args:
        level: Log level name; defaults to settings.LOG_LEVEL
    """
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), format=LOG_FORMAT)
    # SQLAlchemy is too chatty at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
