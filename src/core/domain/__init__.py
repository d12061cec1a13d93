"""Domain models and rules.

Pure data structures and calendar/duration arithmetic: no HTTP, no CLI.
"""
