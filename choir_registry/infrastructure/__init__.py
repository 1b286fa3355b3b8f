"""Infrastructure adapters: database, asset storage and report rendering."""
