"""Route extraction, links generation and seed-to-SQL conversion."""

from rwsdk_tools.core.links_writer import generate_links, render_links_module
from rwsdk_tools.core.route_extractor import extract_routes, extract_routes_from_file
from rwsdk_tools.core.seed_to_sql import convert_seed, convert_seed_file

__all__ = [
    "convert_seed",
    "convert_seed_file",
    "extract_routes",
    "extract_routes_from_file",
    "generate_links",
    "render_links_module",
]
