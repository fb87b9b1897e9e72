# -*- coding: utf-8 -*-
from logging import * # allow this module as a passthrough for builtin logging
import logging
import sys


def quick_config(levels=None, **kwargs):
    """Add a basic root logger, this is what the CLI uses to get log output

    :example:
        from reflector import logging
        logging.quick_config(levels={"reflector": "DEBUG"})

    :param levels: dict[str, str], the key is the logger name and the value is
        the level. This can also be a list[tuple] where the tuple is (name,
        level)
    :param **kwargs: key/val, these will be passed into logging.basicConfig
        * verbose_format: bool, pass in True to set the "format" key to a format
            that contains a lot more information
    """
    levels = levels or {}
    verbose = kwargs.pop("verbose_format", False)

    if verbose:
        kwargs.setdefault(
            "format",
            "|".join([
                '[%(levelname).1s',
                '%(asctime)s',
                '%(name)s', # logger name
                '%(pathname)s:%(lineno)s] %(message)s',
            ])
        )

    else:
        kwargs.setdefault("format", "[%(levelname).1s] %(message)s")

    kwargs.setdefault("level", logging.WARNING)
    kwargs.setdefault("stream", sys.stderr)
    logging.basicConfig(**kwargs)

    if isinstance(levels, dict):
        levels = levels.items()

    for logger_name, logger_level in levels:
        l = logging.getLogger(logger_name)
        if isinstance(logger_level, str):
            logger_level = getattr(logging, logger_level.upper())
        l.setLevel(logger_level)

