"""
Maps fixture format JSON onto model classes.

Many model classes, arguments and enum names match the fixture format exactly,
and are instantiated by `typing` trickery, instead of appearing in code: the
constructor's type annotations tell which value is expected.
"""

import inspect
import re
import typing
from enum import EnumType
from types import MappingProxyType, UnionType
from typing import Union

from custom_components.ofl.fixture.entity import Entity
from custom_components.ofl.fixture.exceptions import FixtureConfigurationError

underscore_pattern = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake_case(key: str) -> str:
    """
    The fixture format is defined in camelCase, but Python likes parameters in snake_case.
    """
    return underscore_pattern.sub("_", key).lower()


def constructor_params(cls: type) -> MappingProxyType[str, inspect.Parameter]:
    """
    :return: The parameters of the class's constructor, without self and kwargs.
    """
    params = inspect.signature(cls.__init__).parameters
    return MappingProxyType({
        name: param for name, param in params.items()
        if name != "self" and param.kind != inspect.Parameter.VAR_KEYWORD
    })


def extract_value_type(name: str, value_json, is_combined: bool,
                       params: MappingProxyType[str, inspect.Parameter]):
    """
    Converts a JSON value into the type the parameter is annotated with.
    :param name: The snake_case parameter name.
    :param value_json: The raw JSON value.
    :param is_combined: Whether the value is a bundled [start, end] pair.
    :param params: The parameters of the constructor being called.
    :return: The converted value, wrapped into a list if the parameter is a list.
    """
    type_annotation = params[name].annotation

    should_wrap = False

    # Unwrap if type is typing.Optional
    if (typing.get_origin(type_annotation) is Union or typing.get_origin(type_annotation) is UnionType) and type(
        None
    ) in typing.get_args(type_annotation):
        type_annotation = typing.get_args(type_annotation)[0]

    # Unwrap if type is a list and indicate to wrap the value if it's not already
    if typing.get_origin(type_annotation) is list:
        type_annotation = typing.get_args(type_annotation)[0]
        is_nested = typing.get_origin(type_annotation) is list
        should_wrap = not is_combined and (is_nested or not isinstance(value_json, list))

    if isinstance(value_json, list):
        # If type is list[list[str]], then unwrap the second time
        if typing.get_origin(type_annotation) is list:
            type_annotation = typing.get_args(type_annotation)[0]

        value = [extract_single_value(val, type_annotation) for val in value_json]
    else:
        value = extract_single_value(value_json, type_annotation)

    return [value] if should_wrap else value


def extract_single_value(value_json, type_annotation: type):
    """
    Converts a single JSON value into the given type.
    """
    # Unions like `str | list[str]` or `BladePosition | int` are passed through
    if typing.get_origin(type_annotation) is Union or typing.get_origin(type_annotation) is UnionType:
        enum_types = [arg for arg in typing.get_args(type_annotation) if isinstance(arg, EnumType)]
        if enum_types and isinstance(value_json, str):
            return extract_single_value(value_json, enum_types[0])
        return value_json

    if _is_subclass(type_annotation, Entity):
        return type_annotation.from_string(value_json)

    if not isinstance(value_json, str):
        return value_json

    if isinstance(type_annotation, EnumType):
        # Python enums can't have spaces
        enum_name = value_json.replace(" ", "")
        # Python enums can't start with a number
        if value_json[0].isdigit():
            enum_name = f"_{enum_name}"
        try:
            return type_annotation[enum_name]
        except KeyError:
            raise FixtureConfigurationError(
                f"'{value_json}' is not one of {[member.name for member in type_annotation]}"
            ) from None

    if _is_subclass(type_annotation, bool):
        return bool(value_json)

    if _is_subclass(type_annotation, str):
        return value_json

    raise FixtureConfigurationError(f"I don't know what kind of type this is: {type_annotation}")


def _is_subclass(type_annotation, base: type) -> bool:
    # Generic aliases like list[str] aren't classes
    return (
        isinstance(type_annotation, type)
        and typing.get_origin(type_annotation) is None
        and issubclass(type_annotation, base)
    )
