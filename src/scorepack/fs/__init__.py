"""
Filesystem naming conventions for scorepack.

Models, Python scoring packages and compiled artifacts live at fixed
locations under a working directory so callers only pass identifiers.
"""
