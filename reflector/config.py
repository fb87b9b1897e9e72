# -*- coding: utf-8 -*-
import os
from collections.abc import Mapping


def boolean(value):
    """Convert an environment string into a bool

    :param value: str|bool|int, things like "1", "true", "yes", "off"
    :returns: bool
    """
    if isinstance(value, str):
        value = value.strip().lower()
        if value in set(["", "0", "false", "f", "no", "n", "off"]):
            return False

        return True

    return bool(value)


class Environ(Mapping):
    """Create an Environ namespace instance

    you would usually create this like this:

        environ = Environ("PREFIX_")

    Then you can access any environment variables with that prefix from the
    `environ` instance.

    :Example:
        # in your environment
        export PREFIX_FOOBAR=1

        # in your python code
        environ = Environ("PREFIX_")
        environ.setdefault("FOOBAR", False, type=boolean)
        print(environ.FOOBAR) # True

    Values are looked up in the environment every time they are accessed so
    changes to the environment are picked up immediately
    """
    @classmethod
    def find_namespace(cls, prefix):
        namespace = ""
        if prefix:
            namespace = prefix.split(".", maxsplit=1)[0].upper()
            if not namespace.endswith("_"):
                namespace += "_"
        return namespace

    def __init__(self, namespace="", environ=None):
        """
        :param namespace: str, usually __name__ from the calling module but can
            also be "PREFIX_" or something like that
        :param environ: Mapping, the environment you want this instance to
            wrap, it defaults to os.environ
        """
        self.__dict__["namespace"] = self.find_namespace(namespace)
        self.__dict__["defaults"] = {}
        self.__dict__["environ"] = os.environ if environ is None else environ

    def setdefault(self, key, value, type=None):
        self.defaults[self.ekey(key)] = {
            "value": value,
            "type": type,
        }

    def __setattr__(self, key, value):
        self.__setitem__(key, value)

    def __setitem__(self, key, value):
        self.environ[self.key(key)] = value

    def __delitem__(self, key):
        self.environ.pop(self.key(key), None)

    def __getitem__(self, key):
        ek = self.ekey(key)
        k = self.key(key)
        try:
            v = self.environ[k]

        except KeyError:
            v = self.defaults[ek]["value"]

        if ek in self.defaults:
            if self.defaults[ek]["type"]:
                v = self.defaults[ek]["type"](v)

        return v

    def __getattr__(self, key):
        try:
            return self.__getitem__(key)

        except KeyError as e:
            raise AttributeError(key) from e

    def get(self, key, default=None):
        """get a value for key from the environment

        :param key: str, this will be normalized using the key() method
        :returns: Any, the value in the environment of key, or default if key
            is not in the environment
        """
        try:
            return self[key]

        except KeyError:
            return default

    def items(self):
        seen = set()
        for k, v in self.environ.items():
            if k.startswith(self.namespace):
                ek = self.ekey(k)
                seen.add(ek)
                yield ek, self[ek]

        for ek in self.defaults.keys():
            if ek not in seen:
                yield ek, self[ek]

    def keys(self):
        for k, _ in self.items():
            yield k

    def __iter__(self):
        return self.keys()

    def __len__(self):
        return len(list(self.keys()))

    def key(self, key):
        """normalizes key to have the namespace

        :Example:
            environ = Environ("FOO_")
            k = environ.key("BAR")
            print(k) # FOO_BAR
        """
        if self.namespace and not key.startswith(self.namespace):
            key = self.namespace + key
        return key

    def ekey(self, key):
        """Given a full namespaced key return the key name without the namespace

        :Example:
            environ = Environ("FOO_")
            k = environ.ekey("FOO_BAR")
            print(k) # BAR
        """
        if self.namespace and key.startswith(self.namespace):
            key = key[len(self.namespace):]
        return key


###############################################################################
# Actual environment configuration that is used throughout the package
###############################################################################
environ = Environ("REFLECTOR_")

environ.setdefault("INHERIT_CONSTANTS", True, type=boolean)
"""If True then constants declared on parent classes are included when getting
a class's constants, if False only the class's own constants are returned"""


environ.setdefault("INHERIT_DOCBLOCK", False, type=boolean)
"""If True then a method without documentation will use the documentation of
the same method on a parent class"""

