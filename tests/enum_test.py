# -*- coding: utf-8 -*-

from reflector.enum import Visibility

from . import TestCase


class VisibilityTest(TestCase):
    def test_combine(self):
        v = Visibility.PUBLIC | Visibility.PRIVATE
        self.assertTrue(v & Visibility.PUBLIC)
        self.assertFalse(v & Visibility.PROTECTED)
        self.assertEqual(7, Visibility.ALL)

    def test_find(self):
        self.assertEqual(Visibility.PUBLIC, Visibility.find("public"))
        self.assertEqual(
            Visibility.PUBLIC | Visibility.PRIVATE,
            Visibility.find("public,PRIVATE")
        )
        self.assertEqual(
            Visibility.PROTECTED | Visibility.PRIVATE,
            Visibility.find("protected|private")
        )
        self.assertEqual(Visibility.ALL, Visibility.find("all"))
        self.assertEqual(
            Visibility.PUBLIC | Visibility.PROTECTED,
            Visibility.find(3)
        )
        self.assertIs(Visibility.PRIVATE, Visibility.find(Visibility.PRIVATE))

    def test_find_invalid(self):
        for v in ["nope", "", 8, -1]:
            with self.assertRaises(ValueError):
                Visibility.find(v)

