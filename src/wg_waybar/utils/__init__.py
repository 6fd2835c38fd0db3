"""Small helpers shared by the parser and the infrastructure layer.

Nothing here performs I/O or depends on other ``wg_waybar`` packages.
"""
