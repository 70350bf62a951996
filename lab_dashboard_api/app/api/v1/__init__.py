"""Version 1 of the Lab Dashboard API."""
