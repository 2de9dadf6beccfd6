import logging
import sys


def setup_logging(level: str = "info") -> None:
    """
    Configura el logger raíz con un handler de consola.

    Llamar una sola vez, antes del primer logger.info.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Evitar handlers duplicados si se llama más de una vez.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)

    # httpx registra cada petición en INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
