import logging


logger = logging.getLogger("kredis")
