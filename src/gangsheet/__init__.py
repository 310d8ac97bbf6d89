"""Top-level package for the gang sheet builder.

Provides subpackages:
- gangsheet.core – data models and errors
- gangsheet.assets – loading and measuring uploaded designs
- gangsheet.layout – sheet packing and pagination
- gangsheet.pricing – tiered sheet prices
- gangsheet.output – PDF rendering and bundling
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    from importlib.metadata import version as pkg_version, PackageNotFoundError
    try:
        return pkg_version("gangsheet")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
