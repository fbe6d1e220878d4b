"""
Application Layer for the Coach Strength API.

This package contains:
- ports/: Abstract repository interfaces (what the domain needs)
"""
