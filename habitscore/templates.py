"""Starter habits a new user can pick from."""

HABIT_TEMPLATES = [
    "Wake up on time",
    "Drink 2L of water",
    "Exercise 30 min",
    "Walk 10k steps",
    "Read 20 pages",
    "Meditate 10 min",
    "No sugar",
    "No social media before noon",
    "Journal",
    "Sleep by 11pm",
]
