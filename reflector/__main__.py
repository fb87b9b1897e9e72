# -*- coding: utf-8 -*-
import sys
import argparse
import json

from reflector import logging
from reflector import __version__
from reflector import accessor
from reflector.enum import Visibility


logger = logging.getLogger(__name__)


def to_json(value):
    """Internal function. Used as json.dumps's default for things like
    classes and methods that can't be serialized"""
    name = getattr(value, "__qualname__", None)
    if isinstance(name, str):
        module = getattr(value, "__module__", None)
        return f"{module}:{name}" if module else name

    return repr(value)


class Command(object):
    """Base class for all the subcommands, a child class sets .name and
    .description and implements .get_value"""
    name = ""

    description = ""

    @classmethod
    def add_arguments(cls, parser):
        parser.add_argument(
            "classpath",
            help="The class to reflect (eg, foo.bar:Che or foo.bar.Che)",
        )

    @classmethod
    def handle(cls, args):
        value = cls.get_value(args)
        print(json.dumps(value, indent=2, default=to_json))
        return 0

    @classmethod
    def get_value(cls, args):
        raise NotImplementedError()


class Properties(Command):
    name = "properties"

    description = "Print the static properties and their values"

    @classmethod
    def add_arguments(cls, parser):
        super().add_arguments(parser)
        parser.add_argument(
            "--visibility", "-v",
            type=Visibility.find,
            default=Visibility.ALL,
            help="Comma separated visibilities (eg, public,protected)",
        )

    @classmethod
    def get_value(cls, args):
        return accessor.get_properties(args.classpath, args.visibility)


class Methods(Properties):
    name = "methods"

    description = "Print the method names"

    @classmethod
    def get_value(cls, args):
        return accessor.get_methods(args.classpath, args.visibility)


class Constants(Command):
    name = "constants"

    description = "Print the constants and their values"

    @classmethod
    def get_value(cls, args):
        return accessor.get_constants(args.classpath)


class Hierarchy(Command):
    name = "hierarchy"

    description = "Print the parent class and the implemented interfaces"

    @classmethod
    def get_value(cls, args):
        return {
            "parent": accessor.get_parent_class(args.classpath),
            "interfaces": accessor.get_interfaces(args.classpath),
        }


class Parameters(Command):
    name = "parameters"

    description = "Print a method's parameters merged with its documentation"

    @classmethod
    def add_arguments(cls, parser):
        super().add_arguments(parser)
        parser.add_argument("method", help="The method name")

    @classmethod
    def get_value(cls, args):
        return accessor.get_method_parameters(args.classpath, args.method)


class Docblock(Parameters):
    name = "docblock"

    description = "Print a method's documentation"

    @classmethod
    def add_arguments(cls, parser):
        super().add_arguments(parser)
        parser.add_argument(
            "--strip",
            action="store_true",
            help="Remove comment markers and tags",
        )

    @classmethod
    def handle(cls, args):
        doc = accessor.get_method_docblock(
            args.classpath,
            args.method,
            strip_tags=args.strip,
        )

        if doc is None:
            logger.warning("{}.{} has no docblock".format(
                args.classpath,
                args.method,
            ))
            return 1

        print(doc)
        return 0


class EntryPoint(object):
    name = ""

    description = "Reflector CLI"

    commands = [
        Properties,
        Methods,
        Constants,
        Hierarchy,
        Parameters,
        Docblock,
    ]

    @classmethod
    def handle(cls, argv=None):
        parser = argparse.ArgumentParser(description=cls.description)
        parser.add_argument(
            "--version", "-V",
            action='version',
            version=f"%(prog)s {__version__}"
        )
        parser.add_argument(
            "--debug",
            action="store_true",
            help="Show debug logging",
        )

        subparsers = parser.add_subparsers(dest="command", help="a sub command")
        subparsers.required = True # https://bugs.python.org/issue9253#msg186387

        for command_class in cls.commands:
            subparser = subparsers.add_parser(
                command_class.name,
                help=command_class.description,
                description=command_class.description,
                conflict_handler="resolve",
            )
            command_class.add_arguments(subparser)
            subparser.set_defaults(subclass=command_class)

        args = parser.parse_args(argv)
        logging.quick_config(
            levels={"reflector": "DEBUG" if args.debug else "WARNING"},
            verbose_format=args.debug,
        )
        return args.subclass.handle(args)


if __name__ == "__main__":
    sys.exit(EntryPoint.handle())

