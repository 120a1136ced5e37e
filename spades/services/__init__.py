"""Services built on top of the game core: serialization and simulation."""
