"""
Application Layer for the Liftbook API.

This package contains:
- exceptions: Errors raised across the layer boundary
- ports/: Abstract repository interfaces (what the domain needs)
- use_cases/: Workflows coordinating the ports and domain logic
"""
