"""
mimehdr: typed MIME header fields, with lint.
"""

__version__ = "0.1.0"
