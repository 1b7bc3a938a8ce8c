"""Application services composed on top of the storage facade."""
