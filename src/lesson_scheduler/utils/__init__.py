"""
Utilities: time arithmetic, configuration, logging and file I/O.
"""
