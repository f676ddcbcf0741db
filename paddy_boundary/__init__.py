"""Paddy Boundary Mapping.

Lets a field operator trace the ground boundary of a paddy by placing
geographic points one at a time, validates every point against spacing
and self-intersection rules, computes the enclosed area, and persists a
locked snapshot of the finished boundary.
"""

__version__ = "0.1.0"
