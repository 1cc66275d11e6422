import logging
import os

# Logger name
LOG_NAME = os.getenv("APP_LOGGER_NAME", "onestop_pos")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

# Create logger
logger = logging.getLogger(LOG_NAME)
logger.setLevel(LOG_LEVEL)

# Log format with ISO-like timestamp including milliseconds
LOG_FORMAT = "%(asctime)s.%(msecs)03d - %(filename)s - %(funcName)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Formatter
formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

# Console handler
console_handler = logging.StreamHandler()
console_handler.setLevel(LOG_LEVEL)
console_handler.setFormatter(formatter)
logger.addHandler(console_handler)

# Optional file handler, off unless LOG_FILE_PATH is set
LOG_FILE_PATH = os.getenv("LOG_FILE_PATH")
if LOG_FILE_PATH:
    file_handler = logging.FileHandler(LOG_FILE_PATH)
    file_handler.setLevel(LOG_LEVEL)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

# Avoid duplicate logs when imported in multiple modules
logger.propagate = False
