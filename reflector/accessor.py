# -*- coding: utf-8 -*-
"""Stateless helper functions that read and write class and instance members
regardless of visibility

Every function reflects the target fresh, nothing is cached. Everything
except `call_method` is fail-soft, if the target or member can't be resolved
then a sentinel (None, False, or an empty collection) is returned instead of
an error being raised
"""
import logging

from .config import environ
from .enum import Visibility
from .exception import ReflectionError
from .inspect import ReflectClass


logger = logging.getLogger(__name__)


FAILURES = (ReflectionError, AttributeError, TypeError, ValueError)
"""The errors the fail-soft functions convert into sentinel values"""


def get_target_name(target):
    """Internal function. Get a name for target suitable for a log message"""
    if isinstance(target, str):
        return target

    name = getattr(target, "__qualname__", None)
    if not isinstance(name, str):
        name = type(target).__qualname__

    return name


def log_failure(action, target, e):
    logger.debug("Could not {} on {}: {}".format(
        action,
        get_target_name(target),
        e,
    ))


def get_properties(target, filter=Visibility.ALL):
    """Get the properties of target

    :param target: object|type|str, an instance, a class, or a classpath
    :param filter: Visibility|int|str, only return properties with these
        visibilities
    :returns: dict[str, Any], the property names and their values, empty if
        target can't be reflected
    """
    try:
        return ReflectClass(target).get_properties(filter)

    except FAILURES as e:
        log_failure("get properties", target, e)
        return {}


def get_property(target, name):
    """Get a property's value regardless of visibility

    :param target: object|type|str
    :param name: str, the property name, private properties can use their
        declared name (eg, "__foo")
    :returns: Any, None if the property doesn't exist
    """
    try:
        return ReflectClass(target).get_property(name)

    except FAILURES as e:
        log_failure(f"get property {name}", target, e)
        return None


def set_property(target, name, value):
    """Set a property's value regardless of visibility

    :param target: object|type|str
    :param name: str
    :param value: Any
    :returns: bool, True if the value was set, False if the property doesn't
        exist or couldn't be written
    """
    try:
        ReflectClass(target).set_property(name, value)
        return True

    except FAILURES as e:
        log_failure(f"set property {name}", target, e)
        return False


def get_methods(target, filter=Visibility.ALL):
    """Get the methods of target

    :param target: object|type|str
    :param filter: Visibility|int|str
    :returns: dict[str, callable], the method names and the methods (bound if
        target is an instance), empty if target can't be reflected
    """
    try:
        return ReflectClass(target).get_methods(filter)

    except FAILURES as e:
        log_failure("get methods", target, e)
        return {}


def call_method(target, method_name, parameters=None, keywords=None):
    """Call a method regardless of visibility

    This is the only function that raises, if you want to call something you
    need to know if it didn't get called

    :param target: object|type|str, if this is a class then only static and
        class methods can be called
    :param method_name: str
    :param parameters: Sequence, the positional arguments
    :param keywords: Mapping, the keyword arguments
    :returns: Any, the method's return value
    :raises: ReflectionError, if the target or method can't be resolved or
        the arguments don't match the method's signature
    """
    return ReflectClass(target).call_method(method_name, parameters, keywords)


def has_property(target, name):
    """Returns True if target has property name, a property that is declared
    with an annotation but has no value still exists"""
    try:
        return ReflectClass(target).has_property(name)

    except FAILURES as e:
        log_failure(f"check property {name}", target, e)
        return False


def has_method(target, name):
    """Returns True if target has method name"""
    try:
        return ReflectClass(target).has_method(name)

    except FAILURES as e:
        log_failure(f"check method {name}", target, e)
        return False


def get_constants(target, inherit=None):
    """Get the constants of target's class

    :param target: object|type|str
    :param inherit: bool, include the parent classes' constants, defaults to
        the REFLECTOR_INHERIT_CONSTANTS environment setting
    :returns: dict[str, Any]
    """
    if inherit is None:
        inherit = environ.INHERIT_CONSTANTS

    try:
        return ReflectClass(target).get_constants(inherit=inherit)

    except FAILURES as e:
        log_failure("get constants", target, e)
        return {}


def get_parent_class(target):
    """Get the immediate parent class

    :param target: object|type|str
    :returns: str|None, the parent's classpath (eg, "foo.bar:Che") or None if
        there isn't a parent
    """
    try:
        return ReflectClass(target).get_parent_classpath()

    except FAILURES as e:
        log_failure("get parent class", target, e)
        return None


def get_interfaces(target):
    """Get the interfaces target implements, directly or through its
    parents

    :param target: object|type|str
    :returns: list[str], the interface classpaths
    """
    try:
        rc = ReflectClass(target)
        return [rc.get_classpath(klass) for klass in rc.get_interfaces()]

    except FAILURES as e:
        log_failure("get interfaces", target, e)
        return []


def get_method_parameters(target, method_name, inherit=None):
    """Get detailed information about each of a method's parameters

    :param target: object|type|str
    :param method_name: str
    :param inherit: bool, use a parent's documentation if the method doesn't
        have any, defaults to the REFLECTOR_INHERIT_DOCBLOCK environment setting
    :returns: dict[str, dict[str, Any]], keyed by parameter name in signature
        order, empty if the method can't be reflected
    """
    if inherit is None:
        inherit = environ.INHERIT_DOCBLOCK

    try:
        rc = ReflectClass(target).reflect_method(method_name)
        return rc.get_parameters(inherit=inherit)

    except FAILURES + (NameError,) as e:
        # NameError is raised by annotations that can't be evaluated
        log_failure(f"get parameters of {method_name}", target, e)
        return {}


def get_method_docblock(target, method_name, strip_tags=False, inherit=None):
    """Get a method's documentation

    :param target: object|type|str
    :param method_name: str
    :param strip_tags: bool, True to strip comment markers and tags and
        collapse whitespace, False to get the documentation exactly as python
        reports it
    :param inherit: bool, defaults to the REFLECTOR_INHERIT_DOCBLOCK
        environment setting
    :returns: str|None, None if the method doesn't have documentation
    """
    if inherit is None:
        inherit = environ.INHERIT_DOCBLOCK

    try:
        rc = ReflectClass(target).reflect_method(method_name)
        if rd := rc.reflect_docblock(inherit=inherit):
            return rd.get_docblock(strip_tags=strip_tags)

    except FAILURES as e:
        log_failure(f"get docblock of {method_name}", target, e)

    return None

