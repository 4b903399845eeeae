import copy


def optional(t):
    if isinstance(t, tuple):
        return t + (type(None), )
    return (t, type(None))


class SlottedClassChecker(type):
    def __new__(cls, name, bases, namespace):
        cls_attrs = namespace.get("__attrs__", tuple())
        cls_types = dict(namespace.get("__types__", {}))
        cls_defaults = dict(namespace.get("__defaults__", {}))

        assert isinstance(cls_attrs, tuple)
        assert isinstance(cls_types, dict)
        assert isinstance(cls_defaults, dict)

        # Parent attributes come first so positional construction follows the
        # order in which the hierarchy declared them
        for base in bases:
            assert issubclass(base, SlottedClass), "{} inherits from class {} which must inherit from SlottedClass".format(name, base.__name__)

            cls_attrs = getattr(base, "__attrs__", tuple()) + cls_attrs
            for attr, t in getattr(base, "__types__", {}).items():
                cls_types.setdefault(attr, t)
            for attr, val in getattr(base, "__defaults__", {}).items():
                cls_defaults.setdefault(attr, val)

        if len(set(cls_attrs)) != len(cls_attrs):
            raise RuntimeError("{} declares an attribute twice: {}".format(
                name, cls_attrs))

        namespace["__attrs__"] = cls_attrs
        namespace["__types__"] = cls_types
        namespace["__defaults__"] = cls_defaults

        # Only the newly declared attributes get slots, the rest live in the
        # bases already
        own = tuple(a for a in cls_attrs
                    if not any(a in getattr(b, "__attrs__", ()) for b in bases))
        namespace["__slots__"] = own

        attrs = set(cls_attrs)
        for attr in cls_types:
            assert attr in attrs, "type '{}' not in __attrs__ for {}".format(attr, name)
        for attr in cls_defaults:
            assert attr in attrs, "default '{}' not in __attrs__ for {}".format(attr, name)

        return type.__new__(cls, name, bases, namespace)


class SlottedClass(metaclass=SlottedClassChecker):
    """
    Record base class. Subclasses list their fields in __attrs__, may
    restrict field types through __types__ and give defaults through
    __defaults__. Assigning an undeclared attribute raises AttributeError.
    """
    __attrs__ = tuple()
    __types__ = {}
    __defaults__ = {}

    def __init__(self, *args, **kwargs):
        if len(args) > len(self.__attrs__):
            raise TypeError("{} takes at most {} arguments ({} given)".format(
                type(self).__name__, len(self.__attrs__), len(args)))

        for i, val in enumerate(args):
            self.assign_and_check(self.__attrs__[i], val)

        for attr in self.__attrs__[len(args):]:
            if attr in kwargs:
                val = kwargs.pop(attr)
            elif attr in self.__defaults__:
                val = copy.copy(self.__defaults__[attr])
            else:
                raise TypeError("{} missing value for '{}'".format(
                    type(self).__name__, attr))
            self.assign_and_check(attr, val)

        if kwargs:
            raise TypeError("{} got unexpected arguments {}".format(
                type(self).__name__, sorted(kwargs)))

    def assign_and_check(self, attr, val):
        def __raise_type_error(attr, owner_t, expected_t, found_t):
            raise TypeError("Expected '{}' of {} to be type {}. Found {}.".format(
                attr, owner_t, expected_t, found_t
            ))

        def __recursive_check(val, expected, original):
            """Recursively check container items."""
            if isinstance(expected, list):
                if not isinstance(val, list):
                    __raise_type_error(attr, type(self), original, type(val))

                for item in val:
                    __recursive_check(item, expected[0], original)
            elif not isinstance(val, expected):
                __raise_type_error(attr, type(self), original, type(val))

        if attr in self.__types__:
            expected = self.__types__[attr]
            __recursive_check(val, expected, expected)

        setattr(self, attr, val)

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return all(getattr(self, a) == getattr(other, a) for a in self.__attrs__)

    def __ne__(self, other):
        return not (self == other)

    def __hash__(self):
        return hash(tuple(self._hashable(getattr(self, a)) for a in self.__attrs__))

    @staticmethod
    def _hashable(val):
        if isinstance(val, list):
            return tuple(val)
        return val

    def __repr__(self):
        return "{}({})".format(
            type(self).__name__,
            ", ".join("{}={!r}".format(a, getattr(self, a)) for a in self.__attrs__)
        )

    def dict(self):
        return {a: getattr(self, a) for a in self.__attrs__}

    def replace(self, **changes):
        """Copy of this record with some fields changed."""
        values = self.dict()
        values.update(changes)
        return type(self)(**values)
