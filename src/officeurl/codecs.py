"""
Parameter lists of an office URL segment and the codecs that convert their values.

A segment carries its parameters as a comma separated list of key=value pairs. Values that
contain reserved characters are percent-encoded. The raw pairs are kept exactly as written,
and a codec is applied when a decoded view is needed.
"""
from abc import abstractmethod
from collections import OrderedDict
from urllib.parse import quote, unquote

from officeurl.support.mixins import CommonEqualityMixin, StringerMixin


PAIR_SEPARATOR = ','
KEY_SEPARATOR = '='

# characters that are left as-is when a value is encoded. Separators and '%' are always escaped.
SAFE_CHARACTERS = "/:@!$&'()*+[]"


class ParameterError(ValueError):
    """ Indicates a parameter list that cannot be parsed. """


class ValueCodec:
    """
    Knows how to convert a parameter value to/from its on-wire form.
    """

    @abstractmethod
    def decode(self, data):
        """ decodes the on-wire form of a value """
        raise NotImplementedError()

    @abstractmethod
    def encode(self, value):
        """ encodes a value to the on-wire form """
        raise NotImplementedError()


class IdentityCodec(ValueCodec):
    """
    An identity codec - the input is returned as the result
    """

    def encode(self, value):
        return value

    def decode(self, data):
        return data


class PercentCodec(ValueCodec):
    """
    Percent-encodes reserved characters as %XX octets of the UTF-8 encoding.

    >>> PercentCodec().decode('my%20pipe')
    'my pipe'
    >>> PercentCodec().encode('a,b;c=d')
    'a%2Cb%3Bc%3Dd'
    """

    def encode(self, value):
        return quote(value, safe=SAFE_CHARACTERS)

    def decode(self, data):
        return unquote(data)


identity_codec = IdentityCodec()
percent_codec = PercentCodec()


def encode_value(value):
    """
    Percent-encodes a value so it can be embedded in a segment.

    >>> encode_value('office')
    'office'
    >>> encode_value('my pipe')
    'my%20pipe'
    """
    return percent_codec.encode(str(value))


class ParameterList(CommonEqualityMixin, StringerMixin):
    """
    An ordered, immutable list of (key, raw value) pairs. Keys are unique.
    """

    def __init__(self, pairs=()):
        pairs = tuple((str(k), str(v)) for k, v in pairs)
        seen = set()
        for key, _ in pairs:
            if not key:
                raise ParameterError("empty parameter key")
            if key in seen:
                raise ParameterError("duplicate parameter '%s'" % key)
            seen.add(key)
        self._pairs = pairs

    @staticmethod
    def parse(raw: str) -> 'ParameterList':
        """
        Splits a raw parameter list into key/value pairs. The values are not decoded.

        >>> ParameterList.parse('host=localhost,port=2002').keys()
        ('host', 'port')
        >>> ParameterList.parse('').keys()
        ()
        """
        if not raw:
            return ParameterList()
        pairs = []
        for item in raw.split(PAIR_SEPARATOR):
            key, sep, value = item.partition(KEY_SEPARATOR)
            if not sep:
                raise ParameterError("parameter '%s' is not of the form key=value" % item)
            pairs.append((key, value))
        return ParameterList(pairs)

    def format(self) -> str:
        """ the raw parameter list, as it appears in a segment """
        return PAIR_SEPARATOR.join(k + KEY_SEPARATOR + v for k, v in self._pairs)

    def keys(self):
        return tuple(k for k, _ in self._pairs)

    def get(self, key, default=None, codec: ValueCodec=identity_codec):
        """
        Looks up a single value. Unlike decode(), the value is returned as written unless a codec
        is given, since callers validate raw values such as the port.
        :return: the value passed through the codec, or default (never decoded) if the key is absent

        >>> ParameterList.parse('name=my%20pipe').get('name')
        'my%20pipe'
        >>> ParameterList.parse('name=my%20pipe').get('name', codec=percent_codec)
        'my pipe'
        """
        for k, v in self._pairs:
            if k == key:
                return codec.decode(v)
        return default

    def decode(self, codec: ValueCodec=percent_codec) -> OrderedDict:
        """
        Applies the codec to each value.
        :return: a new ordered mapping of key to decoded value
        """
        return OrderedDict((k, codec.decode(v)) for k, v in self._pairs)

    def __contains__(self, key):
        return key in self.keys()

    def __len__(self):
        return len(self._pairs)

    def __iter__(self):
        return iter(self._pairs)
