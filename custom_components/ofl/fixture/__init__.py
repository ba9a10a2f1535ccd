"""
Model classes of the fixture format: channels, capabilities, wheels, modes
and the fixture holding them together.
https://github.com/OpenLightingProject/open-fixture-library/blob/master/docs/fixture-format.md
"""

from custom_components.ofl import OFL_URL

__all__ = ["OFL_URL"]
