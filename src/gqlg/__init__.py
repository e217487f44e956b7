from gqlg.logger import get_logger

__author__ = """gqlg contributors"""
__version__ = "0.1.0"

log = get_logger("gqlg")
