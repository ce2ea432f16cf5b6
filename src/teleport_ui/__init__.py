"""teleport-ui: fuzzy-pick a Teleport database and user, then connect."""

__version__ = "0.1.0"
