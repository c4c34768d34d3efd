"""Hotel catalogue: hotels, rooms, search and destinations."""
