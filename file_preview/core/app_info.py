"""
Utility to read app info from pyproject.toml
"""

import os
import tomllib as toml


def get_app_info():
    """
    Reads pyproject.toml and returns a dictionary with app info.
    """
    try:
        # From file_preview/core/app_info.py, go up two levels to reach pyproject.toml
        current_dir = os.path.dirname(os.path.abspath(__file__))
        pyproject_path = os.path.join(current_dir, "..", "..", "pyproject.toml")

        with open(pyproject_path, "rb") as f:
            pyproject_data = toml.load(f)

        project_data = pyproject_data.get("project", {})

        return {
            "name": project_data.get("name", "file-preview"),
            "version": project_data.get("version", "0.1.0"),
            "description": project_data.get("description", "File Preview"),
        }
    except (OSError, toml.TOMLDecodeError):
        # Installed without the source tree
        return {"name": "file-preview", "version": "0.1.0", "description": "File Preview"}


_app_info = get_app_info()


def get_app_name() -> str:
    """Get app name"""
    return _app_info["name"]


def get_app_version() -> str:
    """Get app version"""
    return _app_info["version"]


def get_app_description() -> str:
    """Get app description"""
    return _app_info["description"]
