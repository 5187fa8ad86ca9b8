import logging


def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    # tortoise logs every query at debug
    logging.getLogger("tortoise").setLevel(max(logging.getLogger().level, logging.INFO))
