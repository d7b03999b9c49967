"""Version resolution for the .NET SDK.

Translates global.json roll-forward policies into version ranges, curates the
list of known SDK versions and resolves aliases such as ``lts`` through the
official release metadata.
"""

__version__ = "0.1.0"
