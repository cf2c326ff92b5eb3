"""
Tunebox - a minimal media-library server for uploaded audio files.
"""

__version__ = "0.1.0"
