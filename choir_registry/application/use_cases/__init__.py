"""Use cases exposed to the HTTP layer and scripts."""
