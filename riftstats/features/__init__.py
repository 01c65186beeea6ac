"""Feature modules built on top of the core Riot API layer."""
