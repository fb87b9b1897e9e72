# -*- coding: utf-8 -*-

from .accessor import (
    get_properties,
    get_property,
    set_property,
    get_methods,
    call_method,
    has_property,
    has_method,
    get_constants,
    get_parent_class,
    get_interfaces,
    get_method_parameters,
    get_method_docblock,
)
from .docblock import (
    ReflectDocblock,
    strip_tags,
)
from .enum import (
    Visibility,
)
from .exception import (
    ReflectionError,
    TargetError,
    MemberError,
    ArgumentError,
)
from .inspect import (
    ReflectCallable,
    ReflectClass,
)


__version__ = "0.1.0"

