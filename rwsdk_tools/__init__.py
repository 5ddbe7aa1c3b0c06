"""
rwsdk-tools

Source-text generators for RedwoodSDK projects: typed route links from the
worker's router definition, and SQL from Prisma seed scripts.
"""

__version__ = "0.1.0"

from rwsdk_tools.core.links_writer import generate_links
from rwsdk_tools.core.route_extractor import extract_routes
from rwsdk_tools.core.seed_to_sql import convert_seed

__all__ = [
    "convert_seed",
    "extract_routes",
    "generate_links",
]
