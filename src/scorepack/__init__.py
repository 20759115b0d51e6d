"""scorepack: build deployable scoring artifacts for trained models."""

__version__ = "0.1.0"
