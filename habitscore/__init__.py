"""habitscore — daily habit scoring and progress series."""
