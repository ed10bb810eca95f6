"""
Office URLs describe how to reach an office process over an interprocess connection.

An office URL is a UNO URL without its "uno:" prefix. It names the connection type and its
parameters, the bridge protocol and its parameters, and the object to bind to once connected:

    <connection-type>,<params>;<protocol-name>,<params>;<object-id>

Two connection types are supported: TCP sockets and named pipes. Named pipes are marginally faster
and do not take up a TCP port, but the office process and its client must run on the same host.

For example

    pipe,name=office;urp;StarOffice.ServiceManager
    socket,host=127.0.0.1,port=2002,tcpNoDelay=1;urp;StarOffice.ServiceManager
"""
import logging
import re

from officeurl.codecs import ParameterList, ParameterError, PAIR_SEPARATOR, encode_value, identity_codec
from officeurl.support.mixins import CommonEqualityMixin

logger = logging.getLogger(__name__)

PIPE = 'pipe'
SOCKET = 'socket'
CONNECTION_TYPES = (PIPE, SOCKET)

DEFAULT_HOST = '127.0.0.1'
DEFAULT_PROTOCOL = 'urp'
SERVICE_MANAGER = 'StarOffice.ServiceManager'
MAX_PORT = 65535

URL_PREFIX = 'uno:'
SEGMENT_SEPARATOR = ';'

_port_pattern = re.compile(r'[0-9]+')


class InvalidDescriptorError(ValueError):
    """ Indicates a string that is not a valid office URL. The offending string is available as raw. """

    def __init__(self, message, raw):
        super().__init__(message, raw)
        self.message = message
        self.raw = raw

    def __str__(self):
        return "%s: '%s'" % (self.message, self.raw)


def _split_segment(segment):
    """
    Splits a segment into its name and raw parameters.

    >>> _split_segment('socket,host=localhost,port=2002')
    ('socket', 'host=localhost,port=2002')
    >>> _split_segment('urp')
    ('urp', '')
    """
    name, _, params = segment.partition(PAIR_SEPARATOR)
    return name, params


def _join_segment(name, params: ParameterList):
    raw = params.format()
    return name + PAIR_SEPARATOR + raw if raw else name


def _check_port(port):
    """
    Validates a raw port value and returns it as an int, or None if it is not a valid port.

    >>> _check_port('2002')
    2002
    >>> _check_port('-1') is None
    True
    >>> _check_port('65536') is None
    True
    >>> _check_port('2002\\n') is None
    True
    """
    if not _port_pattern.fullmatch(port):
        return None
    value = int(port)
    return value if value <= MAX_PORT else None


class ConnectionDescriptor(CommonEqualityMixin):
    """
    An immutable, parsed office URL.
    Create instances with for_pipe(), for_socket() or parse().
    """

    def __init__(self, connection_type, connection_parameters: ParameterList,
                 protocol_name, protocol_parameters: ParameterList, object_id, raw=None):
        """
        :param raw: the string the fields were parsed from, reported when the fields are invalid.
            Defaults to the string the fields format to.
        :raises InvalidDescriptorError: when the fields do not describe a valid office URL
        """
        self._connection_type = connection_type
        self._connection_parameters = connection_parameters
        self._protocol_name = protocol_name
        self._protocol_parameters = protocol_parameters
        self._object_id = object_id
        self._check(raw)

    def _check(self, raw):
        if not isinstance(self._connection_parameters, ParameterList) or \
                not isinstance(self._protocol_parameters, ParameterList):
            raise InvalidDescriptorError("parameters must be a ParameterList", raw)
        if not all(isinstance(v, str) for v in (self._connection_type, self._protocol_name, self._object_id)):
            raise InvalidDescriptorError("connection type, protocol name and object id must be strings", raw)
        if raw is None:
            raw = self.to_string()

        if self._connection_type not in CONNECTION_TYPES:
            raise InvalidDescriptorError("unknown connection type '%s'" % self._connection_type, raw)
        if not self._protocol_name:
            raise InvalidDescriptorError("missing protocol name", raw)
        if not self._object_id:
            raise InvalidDescriptorError("missing object id", raw)

        params = self._connection_parameters
        if self._connection_type == PIPE:
            if not params.get('name'):
                raise InvalidDescriptorError("a pipe connection requires a name", raw)
        elif 'port' not in params:
            raise InvalidDescriptorError("a socket connection requires a port", raw)
        elif _check_port(params.get('port')) is None:
            raise InvalidDescriptorError("invalid port '%s'" % params.get('port'), raw)

    @staticmethod
    def for_pipe(pipe_name) -> 'ConnectionDescriptor':
        """
        Creates the office URL for the named pipe.

        >>> str(ConnectionDescriptor.for_pipe('office'))
        'pipe,name=office;urp;StarOffice.ServiceManager'
        """
        if not pipe_name:
            raise InvalidDescriptorError("a pipe name is required", pipe_name)
        return ConnectionDescriptor.parse(
            "pipe,name=" + encode_value(pipe_name) + ";" + DEFAULT_PROTOCOL + ";" + SERVICE_MANAGER)

    @staticmethod
    def for_socket(host, port) -> 'ConnectionDescriptor':
        """
        Creates the office URL for a TCP port.
        :param host: The host. Uses 127.0.0.1 if None
        :param port: The port number.

        >>> str(ConnectionDescriptor.for_socket(None, 2002))
        'socket,host=127.0.0.1,port=2002,tcpNoDelay=1;urp;StarOffice.ServiceManager'
        """
        host = DEFAULT_HOST if host is None else host
        return ConnectionDescriptor.parse(
            "socket,host=" + encode_value(host) + ",port=" + str(port) + ",tcpNoDelay=1;"
            + DEFAULT_PROTOCOL + ";" + SERVICE_MANAGER)

    @staticmethod
    def parse(raw: str) -> 'ConnectionDescriptor':
        """
        Parses an office URL. A leading "uno:" is ignored.
        :raises InvalidDescriptorError: when the string is not a valid office URL
        """
        try:
            return ConnectionDescriptor._parse(raw)
        except InvalidDescriptorError as e:
            logger.debug("invalid office url %s" % e)
            raise

    @staticmethod
    def _parse(raw):
        if not isinstance(raw, str):
            raise InvalidDescriptorError("an office url must be a string", raw)
        url = raw[len(URL_PREFIX):] if raw[:len(URL_PREFIX)].lower() == URL_PREFIX else raw

        segments = url.split(SEGMENT_SEPARATOR)
        if len(segments) != 3:
            raise InvalidDescriptorError(
                "expected 3 segments separated by '%s', found %d" % (SEGMENT_SEPARATOR, len(segments)), raw)
        connection_segment, protocol_segment, object_id = segments

        connection_type, connection_raw = _split_segment(connection_segment)
        protocol_name, protocol_raw = _split_segment(protocol_segment)
        try:
            connection_parameters = ParameterList.parse(connection_raw)
            protocol_parameters = ParameterList.parse(protocol_raw)
        except ParameterError as e:
            raise InvalidDescriptorError(str(e), raw) from e

        return ConnectionDescriptor(connection_type, connection_parameters,
                                    protocol_name, protocol_parameters, object_id, raw)

    @property
    def connection_type(self):
        return self._connection_type

    @property
    def protocol_name(self):
        return self._protocol_name

    @property
    def object_id(self):
        return self._object_id

    @property
    def connection_parameters(self):
        """ The connection parameters. Encoded characters like '%41' are decoded. """
        return self._connection_parameters.decode()

    @property
    def protocol_parameters(self):
        """ The protocol parameters. Encoded characters like '%41' are decoded. """
        return self._protocol_parameters.decode()

    @property
    def connection_parameters_raw(self):
        """ The connection parameters as written. Encoded characters are not decoded. """
        return self._connection_parameters.format()

    @property
    def protocol_parameters_raw(self):
        """ The protocol parameters as written. Encoded characters are not decoded. """
        return self._protocol_parameters.format()

    @property
    def connection_segment_raw(self):
        """ The connection type and its parameters as written. """
        return _join_segment(self._connection_type, self._connection_parameters)

    @property
    def protocol_segment_raw(self):
        """ The protocol name and its parameters as written. """
        return _join_segment(self._protocol_name, self._protocol_parameters)

    @property
    def pipe_name(self):
        """ the decoded pipe name, or None for a socket connection """
        return self.connection_parameters['name'] if self._connection_type == PIPE else None

    @property
    def host(self):
        """ the decoded host, or None for a pipe connection. Defaults to 127.0.0.1 when not given. """
        if self._connection_type != SOCKET:
            return None
        return self.connection_parameters.get('host') or DEFAULT_HOST

    @property
    def port(self):
        if self._connection_type != SOCKET:
            return None
        return int(self._connection_parameters.get('port'))

    @property
    def tcp_no_delay(self):
        """ True unless tcpNoDelay is set to 0. None for a pipe connection. """
        if self._connection_type != SOCKET:
            return None
        return self._connection_parameters.get('tcpNoDelay', '1', identity_codec) != '0'

    def key(self):
        """
        A short identifier of the endpoint.

        >>> ConnectionDescriptor.for_pipe('office').key()
        'pipe:office'
        >>> ConnectionDescriptor.for_socket('localhost', 2002).key()
        'localhost:2002'
        """
        if self._connection_type == PIPE:
            return PIPE + ':' + self.pipe_name
        return self.host + ':' + str(self.port)

    def to_string(self):
        return SEGMENT_SEPARATOR.join((self.connection_segment_raw, self.protocol_segment_raw, self._object_id))

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return type(self).__name__ + "('" + self.to_string() + "')"
