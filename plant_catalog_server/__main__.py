"""Allow running with ``python -m plant_catalog_server``."""

from .cli import main

main()
