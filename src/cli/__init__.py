"""
CLI (Command Line Interface) for the Invader Comparator.

This is a thin wrapper around the core library. All business logic lives
in the comparator package.
"""
