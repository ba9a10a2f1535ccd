"""
General exceptions that can occur within the fixture model.
"""

from homeassistant.exceptions import IntegrationError


class FixtureConfigurationError(IntegrationError):
    """
    Something being wrong with the fixture configuration itself.
    This is open-fixture-format related, not user-related.
    """

    def __init__(self, msg: str, *args):
        super().__init__(*args)
        self.msg = msg

    def __str__(self) -> str:
        return self.msg


class EntityParseError(FixtureConfigurationError):
    """
    An entity string, like `50%` or `fast`, could not be understood.
    """

    def __init__(self, entity_string: str, expected: str | None = None, *args):
        msg = f"Could not parse entity '{entity_string}'"
        if expected:
            msg = f"{msg}, expected {expected}"
        super().__init__(msg, *args)
        self.entity_string = entity_string


class ResolutionError(ValueError):
    """
    A resolution was requested that the channel can't provide.
    This is a programming error of the caller and is never recovered from.
    """
