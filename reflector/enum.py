# -*- coding: utf-8 -*-
import re
from enum import IntFlag


class Visibility(IntFlag):
    """The visibility tiers a member can have, these can be combined using
    bitwise or (eg, `Visibility.PUBLIC | Visibility.PRIVATE`)

    Python marks visibility by naming convention:

        * public - `name` (dunder names like `__init__` are also public)
        * protected - `_name`
        * private - `__name`, stored name mangled as `_Classname__name`
    """
    PUBLIC = 1
    PROTECTED = 2
    PRIVATE = 4
    ALL = PUBLIC | PROTECTED | PRIVATE

    @classmethod
    def find(cls, name_or_value):
        """Given a name or a value find the matching flag

        :param name_or_value: Visibility|int|str, a flag, an int bitmask, or a
            name like "public" or names separated by commas or pipes like
            "public,protected"
        :returns: Visibility
        :raises: ValueError, if name_or_value isn't a valid visibility
        """
        if isinstance(name_or_value, cls):
            return name_or_value

        if isinstance(name_or_value, int):
            if name_or_value & ~int(cls.ALL) or name_or_value < 0:
                raise ValueError(
                    "Value {} is not a valid visibility".format(name_or_value)
                )

            return cls(name_or_value)

        value = cls(0)
        for name in re.split(r"[\s,|]+", name_or_value.strip()):
            if name:
                try:
                    value |= cls[name.upper()]

                except KeyError as e:
                    raise ValueError(
                        f"{name} is not a member of {cls.__name__}"
                    ) from e

        if not value:
            raise ValueError(
                f"{name_or_value} is not a member of {cls.__name__}"
            )

        return value

