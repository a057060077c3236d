import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: str = "INFO"):
    """Configure root logging once per process"""
    global _configured
    if _configured:
        logging.getLogger().setLevel(level.upper())
        return

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    _configured = True
