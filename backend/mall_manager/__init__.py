"""Mall and store management: validation, capacity, revenue and cascade rules over SQLAlchemy."""
