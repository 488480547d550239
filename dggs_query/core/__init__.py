"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: World envelope, pole coordinates, hierarchy shape
- exceptions: Custom exception hierarchy
"""
