"""
FSGAME
Fetches fragmented FSGAME archives, unpacks them and stores the files
for a viewer to load.
"""
__version__ = "1.0.0"
