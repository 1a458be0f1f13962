"""IconBaker: bake source images into multi-resolution icon containers."""

__version__ = "0.3.0"

PROG_NAME = "icon-baker"
