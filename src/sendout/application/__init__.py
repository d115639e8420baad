"""Application layer - provider-independent contracts."""
