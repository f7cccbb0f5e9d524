import logging
import sys


def configure_logging(level: str = "INFO") -> logging.Logger:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    # Requests are logged by RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").disabled = True

    return logging.getLogger("shortlinks")
