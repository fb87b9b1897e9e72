# -*- coding: utf-8 -*-
import inspect
from typing import Any, Annotated, Optional, Union

from reflector.enum import Visibility
from reflector.exception import TargetError, MemberError
from reflector.inspect import (
    ReflectClass,
    ReflectCallable,
    get_type_name,
    type_allows_null,
)

from . import TestCase, testdata


class TypeTest(TestCase):
    def test_get_type_name(self):
        self.assertIsNone(get_type_name(inspect.Parameter.empty))
        self.assertEqual("int", get_type_name(int))
        self.assertEqual("Foo", get_type_name("Foo"))
        self.assertEqual("None", get_type_name(None))
        self.assertEqual("list[int]", get_type_name(list[int]))
        self.assertEqual("Any", get_type_name(Any))

    def test_type_allows_null(self):
        self.assertTrue(type_allows_null(inspect.Parameter.empty))
        self.assertTrue(type_allows_null(Any))
        self.assertTrue(type_allows_null(None))
        self.assertTrue(type_allows_null(Optional[int]))
        self.assertTrue(type_allows_null(Union[int, str, None]))
        self.assertTrue(type_allows_null(int | None))
        self.assertTrue(type_allows_null(Annotated[Optional[str], "meta"]))
        self.assertTrue(type_allows_null("Optional[Foo]"))
        self.assertTrue(type_allows_null("Foo | None"))

        self.assertFalse(type_allows_null(int))
        self.assertFalse(type_allows_null(Union[int, str]))
        self.assertFalse(type_allows_null(Annotated[str, "meta"]))
        self.assertFalse(type_allows_null("Foo"))
        self.assertFalse(type_allows_null("NoneSuch"))


class ReflectClassTest(TestCase):
    def test_resolve_class(self):
        class Foo(object): pass

        self.assertIs(Foo, ReflectClass.resolve_class(Foo))
        self.assertIs(Foo, ReflectClass.resolve_class(Foo()))
        self.assertIs(
            ReflectClassTest,
            ReflectClass.resolve_class(f"{__name__}:ReflectClassTest")
        )
        self.assertIs(
            ReflectClassTest,
            ReflectClass.resolve_class(f"{__name__}.ReflectClassTest")
        )

        with self.assertRaises(TargetError):
            ReflectClass.resolve_class(f"{__name__}:TypeTest.test_get_type_name")

        with self.assertRaises(TargetError):
            ReflectClass.resolve_class("does.not.exist:Foo")

        with self.assertRaises(TypeError):
            ReflectClass("")

    def test_instance(self):
        class Foo(object): pass

        self.assertFalse(ReflectClass(Foo).is_instance())
        self.assertTrue(ReflectClass(Foo()).is_instance())
        self.assertFalse(ReflectClass(f"{__name__}:ReflectClassTest").is_instance())

    def test_classpath(self):
        foo_class = testdata.create_module_class([
            "class Foo(object):",
            "    pass",
        ])

        rc = ReflectClass(foo_class)
        self.assertTrue(rc.classpath.endswith(":Foo"))
        self.assertIs(foo_class, ReflectClass(rc.classpath).target_class)

    def test_classify(self):
        class _Foo(object): pass
        class Bar(_Foo): pass

        rc = ReflectClass(Bar)
        self.assertEqual(("foo", Visibility.PUBLIC), rc.classify("foo"))
        self.assertEqual(("__init__", Visibility.PUBLIC), rc.classify("__init__"))
        self.assertEqual(("_foo", Visibility.PROTECTED), rc.classify("_foo"))
        self.assertEqual(("__foo", Visibility.PRIVATE), rc.classify("_Bar__foo"))
        self.assertEqual(("__foo", Visibility.PRIVATE), rc.classify("__foo"))
        self.assertIsNone(rc.classify("_Foo__foo"))

        rc = ReflectClass(_Foo)
        self.assertEqual(("__foo", Visibility.PRIVATE), rc.classify("_Foo__foo"))

    def test_get_keys(self):
        class Foo(object): pass

        rc = ReflectClass(Foo)
        self.assertEqual(["_Foo__bar", "__bar"], rc.get_keys("__bar"))
        self.assertEqual(["__bar__"], rc.get_keys("__bar__"))
        self.assertEqual(["_bar"], rc.get_keys("_bar"))

    def test_get_mro(self):
        class Foo(object): pass
        class Bar(Foo): pass

        self.assertEqual([Bar, Foo], ReflectClass(Bar).get_mro())

    def test_reflect_method(self):
        class Foo(object):
            def __bar(self, che):
                """bar docs"""
                pass

        rc = ReflectClass(Foo).reflect_method("__bar")
        self.assertTrue(isinstance(rc, ReflectCallable))
        self.assertEqual("__bar", rc.name)
        self.assertEqual("_Foo__bar", rc.key)
        self.assertEqual("bar docs", rc.get_docblock())
        self.assertEqual(["che"], [p.name for p in rc.get_params()])

        with self.assertRaises(MemberError):
            ReflectClass(Foo).reflect_method("nope")

    def test_get_interfaces_abstract_parent(self):
        """an abstract parent with every method implemented isn't an
        interface"""
        import abc

        class Foo(abc.ABC):
            @abc.abstractmethod
            def foo(self): pass

        class Bar(Foo):
            def foo(self): pass

        class Che(Bar):
            pass

        rc = ReflectClass(Che)
        self.assertEqual([Foo], rc.get_interfaces())
        self.assertIs(Bar, rc.get_parent())


class ReflectCallableTest(TestCase):
    def test_kinds(self):
        class Foo(object):
            def instance(self): pass

            @classmethod
            def klass(cls): pass

            @staticmethod
            def static(): pass

        members = vars(Foo)
        rc = ReflectCallable(members["instance"])
        self.assertTrue(rc.is_instance_method())
        self.assertEqual("instance", rc.name)

        rc = ReflectCallable(members["klass"])
        self.assertTrue(rc.is_classmethod())
        self.assertFalse(rc.is_instance_method())
        self.assertEqual("klass", rc.name)

        rc = ReflectCallable(members["static"])
        self.assertTrue(rc.is_staticmethod())
        self.assertFalse(rc.is_instance_method())

    def test_get_parameters_positional_only(self):
        class Foo(object):
            def bar(self, a, /, b, *, c=1):
                """
                @param int $a the a
                """
                pass

        rc = ReflectClass(Foo()).reflect_method("bar")
        params = rc.get_parameters()
        self.assertEqual("positional_only", params["a"]["kind"])
        self.assertEqual("positional_or_keyword", params["b"]["kind"])
        self.assertEqual("keyword_only", params["c"]["kind"])
        self.assertEqual("the a", params["a"]["doc_description"])
        self.assertIsNone(params["b"]["doc_description"])
        self.assertTrue(params["c"]["is_optional"])

    def test_builtin_method(self):
        class Foo(dict):
            pass

        rc = ReflectClass(Foo).reflect_method("keys")
        self.assertTrue(rc.is_instance_method())
        self.assertEqual({}, rc.get_parameters())

