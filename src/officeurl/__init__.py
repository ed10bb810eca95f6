"""
Office connection URLs

- Office URL: describes how to reach an office process - the connection type and its parameters,
  the bridge protocol and its parameters, and the object to bind to once connected.
  ConnectionDescriptor parses and formats office URLs and gives both the raw and the decoded
  view of their parameters.
- Codecs: a parameter list keeps its values as written. The percent codec decodes them on demand.
- Builder: creates the office URLs for a set of ports and pipe names, and the strings given to the
  office process (--accept) and to the bridge (uno:...).
- Config: the ports, pipe names and urls can be given in layered configuration files.

This package only describes endpoints. Starting the office process and opening the connection
are left to the caller.
"""
from officeurl.url import ConnectionDescriptor, InvalidDescriptorError

__all__ = ['ConnectionDescriptor', 'InvalidDescriptorError']
