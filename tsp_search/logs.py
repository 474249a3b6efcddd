import logging
from typing import Optional

from colorama import Back, Fore, Style, init

init(autoreset=True)

ROOT_LOGGER = "tsp_search"
LOG_FORMAT = "[%(asctime)s] %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"


class ColorFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": Fore.BLUE,
        "INFO": Fore.CYAN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Back.RED + Fore.WHITE,
    }

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy so file handlers sharing the record stay uncoloured.
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, Fore.WHITE)
        record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        record.name = f"{Fore.MAGENTA}{record.name}{Style.RESET_ALL}"
        return super().format(record)


def get_logger(name: str = ROOT_LOGGER, level: int = logging.INFO, logfile: Optional[str] = None) -> logging.Logger:
    """
    Return a logger under the package root.

    Handlers live on the root ``tsp_search`` logger only and are attached the
    first time it is requested; child loggers (``tsp_search.evolutionary`` ...)
    just propagate to it.
    """
    if name != ROOT_LOGGER:
        if not name.startswith(ROOT_LOGGER + "."):
            name = f"{ROOT_LOGGER}.{name}"
        return logging.getLogger(name)
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        root.setLevel(level)
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(ColorFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(console_handler)
        root.propagate = False
    if logfile and not any(isinstance(h, logging.FileHandler) for h in root.handlers):
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(file_handler)
    return root


def configure_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    root = get_logger(ROOT_LOGGER, level=numeric, logfile=logfile)
    root.setLevel(numeric)
    return root
