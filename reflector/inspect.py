# -*- coding: utf-8 -*-
import abc
import copy
import inspect
import logging
import pkgutil
import re
import types
from typing import (
    Any, # https://docs.python.org/3/library/typing.html#the-any-type
    Annotated,
    Generic,
    Protocol,
    Union,
    get_args, # https://stackoverflow.com/a/64643971
    get_origin,
)

from .docblock import ReflectDocblock
from .enum import Visibility
from .exception import (
    ReflectionError,
    TargetError,
    MemberError,
    ArgumentError,
)


logger = logging.getLogger(__name__)


def get_type_name(annotation):
    """Get a name for a parameter's annotation

    :param annotation: Any, usually inspect.Parameter.annotation
    :returns: str|None, None if there is no annotation
    """
    if annotation is inspect.Parameter.empty:
        return None

    if isinstance(annotation, str):
        # from __future__ import annotations or a forward reference
        return annotation

    if annotation is None or annotation is type(None):
        return "None"

    if inspect.isclass(annotation) and not get_args(annotation):
        return annotation.__name__

    return str(annotation).replace("typing.", "")


def type_allows_null(annotation):
    """Return True if None is a valid value for annotation

    an untyped parameter can be anything so it allows None

    :param annotation: Any, usually inspect.Parameter.annotation
    :returns: bool
    """
    if annotation is inspect.Parameter.empty:
        return True

    if annotation is None or annotation is type(None) or annotation is Any:
        return True

    if isinstance(annotation, str):
        return bool(re.search(r"\bNone\b|\bOptional\[|\bAny\b", annotation))

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return any(type_allows_null(arg) for arg in get_args(annotation))

    if origin is Annotated:
        return type_allows_null(get_args(annotation)[0])

    return False


class ReflectCallable(object):
    """Reflect a method found on a class

    :Example:
        rc = ReflectClass(Foo).reflect_method("bar")
        for name, info in rc.get_parameters().items():
            print(name, info["type"], info["doc_description"])
    """
    @property
    def signature(self):
        """Passthrough for `inspect.signature(self.get_function())`"""
        return inspect.signature(self.get_function())

    def __init__(self, target, reflect_class=None, *, key="", name=""):
        """
        :param target: function|staticmethod|classmethod, the raw member as it
            is found in the class's __dict__
        :param reflect_class: ReflectClass, the class target was found in
        :param key: str, the name target is stored under in the class's
            __dict__, this will be the mangled name for private methods
        :param name: str, the declared name of the method
        """
        self.target = target
        self.reflect_class = reflect_class
        self.name = name or getattr(self.get_function(), "__name__", "")
        self.key = key or self.name

    def get_function(self):
        """Get the underlying function, this unwraps staticmethod and
        classmethod"""
        if isinstance(self.target, (staticmethod, classmethod)):
            return self.target.__func__

        return self.target

    def is_staticmethod(self):
        return isinstance(self.target, staticmethod)

    def is_classmethod(self):
        return isinstance(self.target, classmethod)

    def is_instance_method(self):
        """Returns True if this method needs an instance to be called"""
        if self.is_staticmethod() or self.is_classmethod():
            return False

        return (
            inspect.isfunction(self.target)
            or inspect.ismethoddescriptor(self.target)
        )

    def get_docblock(self, inherit=False):
        """Get the documentation attached to the method exactly as python
        reports it

        If the method doesn't have a docstring then the comment lines right
        above the method definition will be used

        :param inherit: bool, if True then check the same method on the
            parent classes if this method doesn't have any documentation
        :returns: str|None, None if the method has no documentation
        """
        function = self.get_function()
        doc = getattr(function, "__doc__", None)
        if doc is None:
            # https://github.com/python/cpython/blob/3.11/Lib/inspect.py#L1119
            doc = inspect.getcomments(function)

        if doc is None and inherit and self.reflect_class:
            for klass in self.reflect_class.get_mro()[1:]:
                if self.key in vars(klass):
                    rc = self.create_reflect_callable(
                        vars(klass)[self.key],
                        key=self.key,
                        name=self.name,
                    )
                    doc = rc.get_docblock(inherit=False)
                    if doc is not None:
                        logger.debug(
                            "Method {} inherited docblock from {}".format(
                                self.name,
                                klass.__qualname__,
                            )
                        )
                        break

        return doc

    def reflect_docblock(self, inherit=False):
        doc = self.get_docblock(inherit=inherit)
        if doc is not None:
            return ReflectDocblock(doc)

    def get_params(self):
        """This gets the params that can be passed in

        This ignores `self` or `cls` as the first argument because it is
        automatically bound by python when the method is called

        :returns: Generator[inspect.Parameter]
        """
        skip = self.is_instance_method() or self.is_classmethod()
        for param in self.signature.parameters.values():
            if skip:
                skip = False
                continue

            yield param

    def get_default(self, param):
        """Get a copy of param's default value, mutable builtin containers
        are shallow copied so changing the returned value won't change the
        function's default

        :param param: inspect.Parameter
        :returns: Any, None if param doesn't have a default
        """
        if param.default is param.empty:
            return None

        if isinstance(param.default, (list, dict, set, bytearray)):
            return copy.copy(param.default)

        return param.default

    def get_parameters(self, inherit=False):
        """Get detailed information about each parameter, this merges the
        signature with any documented parameters

        :param inherit: bool, passed through to .get_docblock
        :returns: dict[str, dict[str, Any]], the key is the parameter name
            and the value is the parameter's information, the keys are in
            the order the parameters are defined in the signature
        """
        tags = {}
        if rd := self.reflect_docblock(inherit=inherit):
            tags = rd.get_param_tags()

        parameters = {}
        for position, param in enumerate(self.get_params()):
            tag = tags.get(param.name, {})
            has_default = param.default is not param.empty
            is_variadic = param.kind in set([
                param.VAR_POSITIONAL,
                param.VAR_KEYWORD,
            ])

            parameters[param.name] = {
                "name": param.name,
                "position": position,
                "kind": param.kind.name.lower(),
                "type": get_type_name(param.annotation),
                "type_allows_null": type_allows_null(param.annotation),
                "is_optional": has_default or is_variadic,
                "has_default": has_default,
                "default_value": self.get_default(param),
                "is_variadic": is_variadic,
                # python passes everything as an object reference
                "is_passed_by_reference": False,
                "doc_type": tag.get("type"),
                "doc_description": tag.get("description"),
            }

        return parameters

    def create_reflect_callable(self, *args, **kwargs):
        return type(self)(*args, reflect_class=self.reflect_class, **kwargs)


class ReflectClass(object):
    """Reflect a class or an instance of a class

    Members are found regardless of their visibility, the visibility of a
    member is inferred from its name (see Visibility)

    :Example:
        rc = ReflectClass(Foo())
        rc.get_properties(Visibility.PRIVATE) # {"__bar": 1}
        rc.set_property("__bar", 2)
    """
    ignore_classes = (object, abc.ABC, Protocol, Generic)
    """Members of these classes are never considered members of the target"""

    ignore_names = set([
        "_abc_impl",
        "_is_protocol",
        "_is_runtime_protocol",
    ])
    """Bookkeeping attributes that python adds to classes"""

    constant_regex = re.compile(r"^_*[A-Z][A-Z0-9_]*$")

    @property
    def classpath(self):
        """The full classpath of self.target_class

        https://docs.python.org/3/library/pkgutil.html#pkgutil.resolve_name

        :returns: str, "modpath:QualifiedClassname", the full classpath (eg,
            foo.bar.che:Classname)
        """
        return self.get_classpath(self.target_class)

    @classmethod
    def get_classpath(cls, klass):
        return ":".join([
            klass.__module__,
            klass.__qualname__
        ])

    @classmethod
    def resolve_class(cls, target):
        """Find the class of target

        :param target: type|str|object, a class, a classpath, or an instance
        :returns: type
        :raises: TargetError, if target is a string that isn't a classpath
        """
        if inspect.isclass(target):
            return target

        if isinstance(target, str):
            try:
                klass = pkgutil.resolve_name(target)

            except (ValueError, ImportError, AttributeError) as e:
                raise TargetError(f"Could not resolve class {target}") from e

            if not inspect.isclass(klass):
                raise TargetError(f"{target} is not a class")

            return klass

        return type(target)

    def __init__(self, target):
        """
        :param target: type|str|object, the class to reflect, a classpath
            (eg, "foo.bar:Che" or "foo.bar.Che") or an instance
        """
        self.target = target
        self.target_class = self.resolve_class(target)
        if inspect.isclass(target) or isinstance(target, str):
            self.instance = None

        else:
            self.instance = target

    def is_instance(self):
        """Returns True if an instance is being reflected"""
        return self.instance is not None

    def get_target(self):
        """Returns what attributes should be fetched from"""
        return self.instance if self.is_instance() else self.target_class

    def get_mro(self):
        """Get the classes whose members are the target's members, this is
        the method resolution order minus python's internal classes

        :returns: list[type]
        """
        return [
            klass for klass in inspect.getmro(self.target_class)
            if klass not in self.ignore_classes
        ]

    def get_mangle_prefix(self, klass=None):
        """Get the prefix python uses to mangle private names in klass

        https://docs.python.org/3/reference/expressions.html#private-name-mangling

        :returns: str, empty if klass's name is all underscores
        """
        klass = klass or self.target_class
        name = klass.__name__.lstrip("_")
        return f"_{name}" if name else ""

    def classify(self, key):
        """Figure out the declared name and visibility of a stored name

        :param key: str, the name as stored in a __dict__
        :returns: tuple[str, Visibility]|None, None if key is a private member
            of another class in the hierarchy
        """
        if key.startswith("__"):
            if key.endswith("__"):
                return key, Visibility.PUBLIC

            return key, Visibility.PRIVATE

        if key.startswith("_"):
            for klass in inspect.getmro(self.target_class):
                prefix = self.get_mangle_prefix(klass)
                if (
                    prefix
                    and key.startswith(prefix + "__")
                    and not key.endswith("__")
                    and len(key) > len(prefix) + 2
                ):
                    if klass is self.target_class:
                        return key[len(prefix):], Visibility.PRIVATE

                    return None

            return key, Visibility.PROTECTED

        return key, Visibility.PUBLIC

    def get_keys(self, name):
        """Get the names that name could be stored under

        :param name: str, the declared name (eg "__foo") or the stored name
            (eg, "_Classname__foo")
        :returns: list[str]
        """
        keys = []
        if name.startswith("__") and not name.endswith("__"):
            if prefix := self.get_mangle_prefix():
                keys.append(prefix + name)

        keys.append(name)
        return keys

    def is_dunder(self, name):
        return name.startswith("__") and name.endswith("__")

    def is_constant_name(self, name):
        return bool(self.constant_regex.match(name))

    def is_method_value(self, value):
        return (
            isinstance(value, (staticmethod, classmethod))
            or inspect.isroutine(value)
        )

    def is_data_value(self, value):
        """Returns True if value is plain data, descriptors (functions,
        property, slots) and classes are not data"""
        return not (inspect.isclass(value) or hasattr(type(value), "__get__"))

    def get_class_members(self, inherit=True):
        """Yield the raw members defined on the class, a child class's
        definition shadows the parent's

        :param inherit: bool, False to only yield the class's own members
        :returns: generator[tuple[str, str, Visibility, Any]], the stored key,
            the declared name, the visibility, and the raw value
        """
        seen = set()
        mro = self.get_mro() if inherit else [self.target_class]
        for klass in mro:
            for key, value in vars(klass).items():
                if key in seen or key in self.ignore_names:
                    continue

                seen.add(key)
                if info := self.classify(key):
                    yield key, info[0], info[1], value

    def get_instance_vars(self):
        """Get the instance's __dict__, empty if the instance doesn't have one
        (eg, it uses __slots__)"""
        try:
            return vars(self.instance)

        except TypeError:
            return {}

    def get_declared_keys(self):
        """Get all the declared names in the hierarchy, these are the
        annotated names and the __slots__ names

        :returns: set[str]
        """
        keys = set()
        for key, _, _, member in self.get_class_members():
            if self.is_instance() and inspect.ismemberdescriptor(member):
                keys.add(key)

        for klass in self.get_mro():
            try:
                keys.update(inspect.get_annotations(klass))

            except NameError as e:
                logger.debug(
                    "Could not get annotations for {}: {}".format(
                        klass.__qualname__,
                        e,
                    )
                )

        return keys

    def reflect_properties(self):
        """Yield every property that currently has a value

        for an instance this is all the instance attributes (including set
        __slots__) and class attributes, for a class this is all the class
        attributes

        :returns: generator[tuple[str, str, Visibility, Any]], the stored key,
            the declared name, the visibility, and the value
        """
        seen = set()
        if self.is_instance():
            for key, value in self.get_instance_vars().items():
                if isinstance(key, str) and not self.is_dunder(key):
                    if info := self.classify(key):
                        seen.add(key)
                        yield key, info[0], info[1], value

        for key, name, visibility, member in self.get_class_members():
            if key in seen or self.is_dunder(name):
                continue

            if self.is_instance() and inspect.ismemberdescriptor(member):
                try:
                    value = member.__get__(self.instance, self.target_class)

                except AttributeError:
                    # slot hasn't been set
                    continue

                seen.add(key)
                yield key, name, visibility, value

            elif (
                self.is_data_value(member)
                and not self.is_constant_name(name)
            ):
                seen.add(key)
                yield key, name, visibility, member

    def find_property_key(self, name):
        """Find the key a property is, or could be, stored under

        a property exists if it has a value or if it has been declared using
        an annotation or __slots__

        :param name: str
        :returns: str
        :raises: MemberError, if the property doesn't exist
        """
        keys = self.get_keys(name)
        for key, _, _, _ in self.reflect_properties():
            if key in keys:
                return key

        declared_keys = self.get_declared_keys()
        for key in keys:
            if key in declared_keys and (info := self.classify(key)):
                name = info[0]
                if not self.is_dunder(name) and not self.is_constant_name(name):
                    return key

        raise MemberError(
            f"Property {self.target_class.__qualname__}.{name} does not exist"
        )

    def get_properties(self, visibility=Visibility.ALL):
        """Get the properties that match visibility

        :param visibility: Visibility|int|str
        :returns: dict[str, Any], the declared name and the value
        """
        visibility = Visibility.find(visibility)
        properties = {}
        for key, name, v, value in self.reflect_properties():
            if v & visibility:
                properties[name] = value

        return properties

    def get_property(self, name):
        """Get the value of property name

        :param name: str, the declared name (eg, "__foo") or stored name
        :returns: Any
        :raises: MemberError, if the property doesn't exist or has no value
        """
        keys = self.get_keys(name)
        for key, _, _, value in self.reflect_properties():
            if key in keys:
                return value

        raise MemberError(
            f"Property {self.target_class.__qualname__}.{name} has no value"
        )

    def set_property(self, name, value):
        """Set an existing property name to value, this won't create new
        properties

        :param name: str
        :param value: Any
        """
        key = self.find_property_key(name)
        setattr(self.get_target(), key, value)
        logger.debug(
            "Set property {} on {}".format(name, self.target_class.__qualname__)
        )

    def has_property(self, name):
        try:
            self.find_property_key(name)
            return True

        except MemberError:
            return False

    def reflect_method_members(self):
        """Yield all the methods defined in the class hierarchy

        :returns: generator[tuple[str, str, Visibility, Any]], the stored key,
            the declared name, the visibility, and the raw member
        """
        for key, name, visibility, member in self.get_class_members():
            if self.is_method_value(member):
                yield key, name, visibility, member

    def get_methods(self, visibility=Visibility.ALL):
        """Get the methods that match visibility

        :param visibility: Visibility|int|str
        :returns: dict[str, callable], the declared name and the method as it
            is accessed through the target (so methods will be bound for an
            instance)
        """
        visibility = Visibility.find(visibility)
        target = self.get_target()
        methods = {}
        for key, name, v, _ in self.reflect_method_members():
            if v & visibility:
                methods[name] = getattr(target, key)

        return methods

    def find_method(self, name):
        """Find the raw method member

        :param name: str, the declared name (eg, "__foo") or stored name
        :returns: tuple[str, Any], the stored key and the raw member
        :raises: MemberError
        """
        keys = self.get_keys(name)
        for key, _, _, member in self.reflect_method_members():
            if key in keys:
                return key, member

        raise MemberError(
            f"Method {self.target_class.__qualname__}.{name} does not exist"
        )

    def reflect_method(self, name):
        """Returns information about the method name on this class

        :param name: str, the name of the method
        :returns: ReflectCallable
        """
        key, member = self.find_method(name)
        return ReflectCallable(member, self, key=key, name=self.classify(key)[0])

    def has_method(self, name):
        try:
            self.find_method(name)
            return True

        except MemberError:
            return False

    def call_method(self, name, args=None, kwargs=None):
        """Call method name with args and kwargs

        If the target is a class only static and class methods can be called

        :param name: str
        :param args: Sequence, positional arguments
        :param kwargs: Mapping, keyword arguments
        :returns: Any, whatever the method returns
        :raises: ReflectionError, if the method can't be found or can't be
            called with args and kwargs. Any error the method raises is not
            caught
        """
        args = list(args or [])
        kwargs = dict(kwargs or {})

        rc = self.reflect_method(name)
        if not self.is_instance() and rc.is_instance_method():
            raise ReflectionError(
                "Non-static method {}.{} cannot be called without an instance".format(
                    self.target_class.__qualname__,
                    name,
                )
            )

        method = getattr(self.get_target(), rc.key)

        try:
            signature = inspect.signature(method)

        except (TypeError, ValueError):
            # some builtins don't have a signature
            signature = None

        if signature:
            try:
                signature.bind(*args, **kwargs)

            except TypeError as e:
                raise ArgumentError(
                    "Invalid arguments for {}.{}: {}".format(
                        self.target_class.__qualname__,
                        name,
                        e,
                    )
                ) from e

        logger.debug(
            "Calling {}.{} with {} positional and {} keyword arguments".format(
                self.target_class.__qualname__,
                name,
                len(args),
                len(kwargs),
            )
        )
        return method(*args, **kwargs)

    def get_constants(self, inherit=True):
        """Get the class's constants, a constant is a data attribute with an
        UPPER_CASE name

        :param inherit: bool, False to only get the constants the class
            defines itself
        :returns: dict[str, Any]
        """
        constants = {}
        for _, name, _, value in self.get_class_members(inherit=inherit):
            if (
                not self.is_dunder(name)
                and self.is_constant_name(name)
                and self.is_data_value(value)
            ):
                constants[name] = value

        return constants

    def get_parent(self):
        """Get the immediate parent class, protocol bases are interfaces
        (see .get_interfaces) and are never the parent

        :returns: type|None, None if the class has no parent
        """
        for klass in self.target_class.__bases__:
            if klass in self.ignore_classes:
                continue

            if klass.__dict__.get("_is_protocol", False):
                # a protocol is an interface the class implements
                continue

            return klass

    def get_parent_classpath(self):
        if parent := self.get_parent():
            return self.get_classpath(parent)

    def is_interface(self, klass):
        """Returns True if klass is an interface, python doesn't have
        interfaces so anything abstract is considered one, that is a Protocol
        or an abc class that has abstract methods"""
        if klass in self.ignore_classes:
            return False

        if klass.__dict__.get("_is_protocol", False):
            return True

        return (
            isinstance(klass, abc.ABCMeta)
            and bool(getattr(klass, "__abstractmethods__", None))
        )

    def get_interfaces(self):
        """Get all the interfaces the class implements, directly or through
        its parents

        :returns: list[type]
        """
        return [
            klass for klass in self.get_mro()
            if klass is not self.target_class and self.is_interface(klass)
        ]

