"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants for geometry rules and storage layout
- exceptions: Boundary error taxonomy
- ingress: HTTP payload and blob client helpers for the Functions app
"""
