# -*- coding: utf-8 -*-
import testdata
from testdata import TestCase


testdata.basic_logging(
    levels={
        "reflector": "WARNING",
    }
)

