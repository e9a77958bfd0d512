"""
Blobflock: an oscillator-modulated flock of coloured blobs with
recordable, replayable input macros.
"""

__version__ = "0.1.0"
