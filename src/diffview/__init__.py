"""diffview.

Turns unified diffs into a JSON diff model or a self-contained HTML page,
then previews, prints, copies or publishes the result.
"""

__version__ = "1.0.0"
__author__ = "diffview contributors"

__all__ = ["__version__"]
