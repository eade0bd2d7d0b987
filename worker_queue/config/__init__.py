"""Stage configuration, typed contracts and policy constants."""
