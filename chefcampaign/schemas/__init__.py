"""
JSON schemas for validating input and output data.

This package contains JSON schema definitions for:
- Restaurant briefs submitted by callers
- Campaign concepts returned by the text-generation model
"""

import os
import json
from functools import lru_cache


def get_schema_path(schema_name):
    """
    Get the absolute path to a schema file.

    Args:
        schema_name (str): Name of the schema file without extension

    Returns:
        str: Absolute path to the schema file
    """
    current_dir = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(current_dir, f"{schema_name}.json")


@lru_cache(maxsize=None)
def load_schema(schema_name):
    """
    Load a JSON schema from file.

    Args:
        schema_name (str): Name of the schema file without extension

    Returns:
        dict: The loaded schema as a dictionary
    """
    with open(get_schema_path(schema_name), 'r') as f:
        return json.load(f)
