"""
Routers module - API endpoint handlers organized by feature.

- spec: Editing and exporting the current Specification
- preferences: Template catalog and theme
- generation: Generate, preview and artifacts
- history: Past generations
"""
