# -*- coding: utf-8 -*-

from reflector.config import (
    Environ,
    boolean,
    environ,
)

from . import TestCase


class BooleanTest(TestCase):
    def test_boolean(self):
        for v in ["1", "true", "Yes", "on", 1, True]:
            self.assertTrue(boolean(v))

        for v in ["0", "false", "No", "off", "", 0, False]:
            self.assertFalse(boolean(v))


class EnvironTest(TestCase):
    def test_namespace(self):
        self.assertEqual("FOO_", Environ.find_namespace("foo.bar"))
        self.assertEqual("FOO_", Environ.find_namespace("FOO_"))
        self.assertEqual("", Environ.find_namespace(""))

    def test_defaults(self):
        e = Environ("FOO_", environ={})
        e.setdefault("BAR", False, type=boolean)
        self.assertFalse(e.BAR)

        e.BAR = "1"
        self.assertTrue(e.BAR)
        self.assertTrue(e["FOO_BAR"])

        del e["BAR"]
        self.assertFalse(e.BAR)

    def test_missing(self):
        e = Environ("FOO_", environ={})
        self.assertIsNone(e.get("CHE"))
        with self.assertRaises(AttributeError):
            e.CHE

    def test_items(self):
        e = Environ("FOO_", environ={"FOO_BAR": "1", "OTHER": "2"})
        e.setdefault("CHE", 3, type=int)
        self.assertEqual({"BAR": "1", "CHE": 3}, dict(e.items()))
        self.assertEqual(2, len(e))

    def test_package_environ(self):
        self.assertEqual("REFLECTOR_", environ.namespace)
        self.assertTrue(environ.INHERIT_CONSTANTS in set([True, False]))
        self.assertTrue(environ.INHERIT_DOCBLOCK in set([True, False]))

