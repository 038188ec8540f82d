DEFAULTS = {
    # Register missing edge endpoints on add_edge
    "AUTO_MATERIALIZE_ENDPOINTS": True,
    # Re-publish node-emitted updates through the manager's bus
    "RELAY_NODE_UPDATES": True,
    # Default snapshot depth limit (0 = unlimited)
    "STRUCTURE_MAX_DEPTH": 0,
    # Level used by configure_logging
    "LOG_LEVEL": "WARNING",
}
