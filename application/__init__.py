"""
Application Layer for the exercise catalog editor.

This package contains:
- ports/: Abstract document store interface (what the workflow needs)
- use_cases/: Read and save workflows over the catalog document
- exceptions.py: Store failure taxonomy shared with infrastructure
"""
