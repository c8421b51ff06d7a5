"""
Blueprint loader
Converts project documents (explicit or compact node shapes) to ``Project``
"""

from .parser import BlueprintParser, parse_blueprint, load_project

__all__ = ["BlueprintParser", "parse_blueprint", "load_project"]
