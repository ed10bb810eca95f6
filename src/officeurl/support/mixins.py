def quote(val):
    return "'" + str(val) + "'" if val is not None else "None"


class StringerMixin:
    """
    Renders the class name and the instance state in key sorted order.
    Leading underscores are dropped from attribute names.
    """

    def __repr__(self):
        return type(self).__name__ + ':' + self._sorted_items_string()

    def _sorted_items_string(self):
        return "{" + ", ".join([("'" + key.lstrip('_')) + "'" + ": " + (quote(val))
                                for key, val in sorted(self.__dict__.items())]) + "}"


class CommonEqualityMixin(object):
    """
    Equality and hashing for immutable value objects.
    Two instances are equal when they are of the same class and their attribute dictionaries are equal.
    Attribute values must be hashable.
    """

    def __eq__(self, other):
        return isinstance(other, self.__class__) and hasattr(other, '__dict__') \
            and self.__dict__ == other.__dict__

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((type(self).__name__,) + tuple(sorted(self.__dict__.items())))
