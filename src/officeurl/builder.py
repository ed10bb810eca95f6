"""
Builds the office URLs an office manager supervises, and the strings handed to the office
process and to the bridge.
"""
import logging

from officeurl.url import ConnectionDescriptor, URL_PREFIX, SEGMENT_SEPARATOR

logger = logging.getLogger(__name__)

DEFAULT_PORT = 2002


def unique_urls(urls):
    """
    Drops any url whose endpoint was already seen, keeping the first.
    """
    seen = set()
    result = []
    for url in urls:
        key = url.key()
        if key in seen:
            logger.warning("ignoring duplicate office endpoint %s" % key)
            continue
        seen.add(key)
        result.append(url)
    return result


def build_office_urls(port_numbers=None, pipe_names=None, host=None):
    """
    Creates an office URL for each port number and each pipe name.
    When neither is given, a single URL for the default port is created.
    :param port_numbers: an iterable of TCP ports
    :param pipe_names: an iterable of pipe names
    :param host: the host the ports are on. Uses 127.0.0.1 if None
    :return: a list of ConnectionDescriptor, sockets first
    """
    port_numbers = list(port_numbers or ())
    pipe_names = list(pipe_names or ())
    if not port_numbers and not pipe_names:
        port_numbers = [DEFAULT_PORT]

    urls = [ConnectionDescriptor.for_socket(host, port) for port in port_numbers]
    urls.extend(ConnectionDescriptor.for_pipe(name) for name in pipe_names)
    return unique_urls(urls)


def accept_argument(url: ConnectionDescriptor):
    """
    The value of the office process --accept option, for the process to listen on the url.

    >>> accept_argument(ConnectionDescriptor.for_pipe('office'))
    'pipe,name=office;urp;'
    """
    return url.connection_segment_raw + SEGMENT_SEPARATOR + url.protocol_segment_raw + SEGMENT_SEPARATOR


def connect_string(url: ConnectionDescriptor):
    """
    The UNO URL a bridge resolves to connect to the office process.

    >>> connect_string(ConnectionDescriptor.for_socket(None, 2002))
    'uno:socket,host=127.0.0.1,port=2002,tcpNoDelay=1;urp;StarOffice.ServiceManager'
    """
    return URL_PREFIX + url.to_string()
