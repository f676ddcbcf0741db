"""Boundary operations invoked by the Functions app.

- submit_boundary: replay submitted vertices through the editor rules and save
- load_boundary: fetch a saved boundary and open an editor seeded from it
"""
