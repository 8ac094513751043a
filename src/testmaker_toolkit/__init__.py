"""Top-level package for the Test Maker toolkit.

Provides subpackages:
- testmaker_toolkit.core – question pool models, schema validation, serialization
- testmaker_toolkit.shuffler – shuffled test generation engine
- testmaker_toolkit.store – JSON project store
- testmaker_toolkit.cli – command line entry point
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
        except OSError:
            content = ""
        for line in content.splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    # Fallback to importlib.metadata for installed package
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("testmaker-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
