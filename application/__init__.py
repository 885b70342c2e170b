"""
Application Layer for the training engine.

This package contains:
- ports/: Abstract repository interfaces (what the engine needs)
- use_cases/: Session lifecycle operations coordinating domain logic and ports
- exceptions.py: Infrastructure-facing exceptions
"""
