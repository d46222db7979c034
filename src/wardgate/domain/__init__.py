"""Domain layer - entities, value objects and pure access-control rules."""
