"""Application services composed from repositories and stores."""
