import logging
import logging.config
import os

from .core.config import settings

# Ensure logs directory exists
os.makedirs("logs", exist_ok=True)

if os.path.exists(settings.LOGGING_CONFIG):
    logging.config.fileConfig(settings.LOGGING_CONFIG, disable_existing_loggers=False)
else:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")


logger = logging.getLogger("storefront")
