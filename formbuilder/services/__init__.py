"""
Form builder services: template compilation, validation, grids and editing.
"""
