import logging
import os
from importlib import metadata

logger = logging.getLogger(__name__)


def get_version() -> str:
    try:
        return metadata.version("mountparse")
    except metadata.PackageNotFoundError:
        logger.info("mountparse is not installed", exc_info=True)

    env_version = os.environ.get("MOUNTPARSE_VERSION")
    if env_version is not None:
        return env_version

    # do not fail due to not able to find version
    return "unknown"


__version__ = get_version()
