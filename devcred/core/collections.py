class CollectionNames:
    """MongoDB collection names used across the service."""

    GROVE_URIS = "grove_uris"
