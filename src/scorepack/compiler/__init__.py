"""
Artifact builds against the remote compiler service.

The builder resolves model, dependency and Python package files under a
working directory, then the client uploads them and publishes the compiled
jar/war at a deterministic path so repeated builds are served from disk.
"""
