"""DepRadar — dependency confusion scanner for package manifests.

This package fetches ``package.json``-style manifests from a list of URLs,
checks every declared dependency against the public npm registry search,
and flags names that are not published.
"""

__version__ = "0.1.0"
