# -*- coding: utf-8 -*-


class ReflectionError(RuntimeError):
    """Raised when something can't be reflected, the fail-soft functions in
    .accessor convert this into a sentinel value, only method invocation lets
    it propagate"""
    pass


class TargetError(ReflectionError, TypeError):
    """Raised when the target is neither an instance nor a resolvable class,
    this is extended so TypeError can also be checked"""
    pass


class MemberError(ReflectionError, AttributeError):
    """Raised when a property or method doesn't exist on the target, this is
    extended so AttributeError can also be checked"""
    pass


class ArgumentError(ReflectionError, TypeError):
    """Raised when the passed in arguments can't be bound to the method's
    signature"""
    pass

