"""
dictfleet: serve a directory of MDict dictionaries, one HTTP listener each.
"""

__version__ = "0.2.0"
