import logging
import os
import platform

from configobj import ConfigObj, ConfigObjError, Section, flatten_errors
from validate import Validator

from officeurl.builder import build_office_urls, unique_urls
from officeurl.url import ConnectionDescriptor

logger = logging.getLogger(__name__)

# The default extension for configuration files
config_extension = '.cfg'

# the configuration shipped with this package
default_directory = os.path.dirname(__file__)


def config_flavor(name, flavor=None):
    configname = name if not flavor else name + '.' + flavor
    return configname


def config_filename(name, directory=None):
    """
    Determines the location of a config file in the given directory.
    """
    config_file = os.path.join(directory or default_directory, name + config_extension)
    return config_file


def load_config_file_base(file, must_exist=True):
    """
    Loads a configuration file
    :param file:        The configuration file to load
    :param must_exist:  when True, the file must exist or an exception is thrown.
    :return: The ConfigObj instance for the file.
    """
    try:
        return ConfigObj(file, interpolation='Template', file_error=must_exist) \
            if must_exist or os.path.exists(file) else ConfigObj()
    except ConfigObjError as e:
        raise type(e)(str(e) + ' at ' + file)


def config_flavor_file(name, directory, subpart=None) -> ConfigObj:
    """
    Loads a specialization of a config file. The configuration file is expected to be named
    after the base, followed by a period and then the specialization, if the specialization is given,
    otherwise just the base name.
    :param name:    The name of the base configuration
    :param subpart: The name of the specialization.
    :return: The ConfigObj for the configuration file, empty if the file does not exist.
    """
    configname = config_flavor(name, subpart)
    file = config_filename(configname, directory)
    config = load_config_file_base(file, False)
    return config


def map_os_name(name):
    """
    >>> map_os_name('Windows')
    'windows'
    >>> map_os_name("Darwin")
    'osx'
    """
    name = name.lower()
    if name == 'darwin':
        name = 'osx'
    return name


def os_name():
    return map_os_name(platform.system())


def validation_errors(config, result):
    """
    Describes each failed key of a validation result.

    >>> validation_errors(None, True)
    []
    """
    if result is True:
        return []
    errors = []
    for section_list, key, res in flatten_errors(config, result):
        section = '.'.join(section_list)
        if key is None:
            errors.append("missing section %s" % section)
        else:
            errors.append("%s.%s: %s" % (section, key, res if res is not False else 'missing'))
    return errors


def load_config(name, directory=None):
    """
        Loads all the configuration files that relate to the given name.
        Configurations are loaded in this order:
        - the default specialization
        - the platform specialization
        - the user override
        - the base configuration
        Later configurations take precedence. The configurations are flattened into a single
        configuration, and then validated against the schema specialization, which must exist.
    :param directory: the location of the configuration files
    :return: the validated ConfigObj
    """
    local_config = config_flavor_file(name, directory)
    default_config = config_flavor_file(name, directory, 'default')
    platform_config = config_flavor_file(name, directory, os_name())
    user_config = load_config_file_base(os.path.expanduser(
        '~/' + name + config_extension), must_exist=False)

    schema = config_filename(config_flavor(name, 'schema'), directory)
    try:
        config = ConfigObj(configspec=schema)
    except (ConfigObjError, IOError) as e:
        raise ConfigObjError("the schema for config file %s could not be loaded: %s" % (name, e)) from e
    config.merge(default_config)
    config.merge(platform_config)
    config.merge(user_config)
    config.merge(local_config)

    validator = Validator()
    result = config.validate(validator, preserve_errors=True)
    errors = validation_errors(config, result)
    if errors:
        raise ConfigObjError("the config file %s failed validation %s" % (name, ', '.join(errors)))
    logger.info("loaded configuration %s from %s" % (name, directory or default_directory))
    return config


def fetch_conf_path(conf: Section, path):
    """
    Retrieves the named configuration section
    :param conf:    The root configuration
    :param path:    The names of the sections to resolve, either an iterable or a '.' separated string
    :return: The configuration section identified by the path, or None if there is no such section
    """
    if isinstance(path, str):
        path = path.split('.')
    for p in path:    # lookup specific section
        conf = conf.get(p, None)
        if conf is None:
            return
    return conf


def office_urls_from_config(name='office', directory=None, section='office'):
    """
    Builds the office URLs described by a configuration.
    The section lists port numbers on a host, pipe names, and complete office urls.
    When none of these are given, the URL for the default port is used.
    :return: a list of ConnectionDescriptor
    :raises ConfigObjError: when the configuration cannot be loaded or has no such section
    :raises InvalidDescriptorError: when the configuration describes an invalid office url
    """
    conf = fetch_conf_path(load_config(name, directory), section)
    if conf is None:
        raise ConfigObjError("the config file %s has no section %s" % (name, section))

    parsed = [ConnectionDescriptor.parse(url) for url in conf['urls']]
    ports, pipes = conf['port_numbers'], conf['pipe_names']
    built = build_office_urls(ports, pipes, conf['host']) if ports or pipes or not parsed else []
    return unique_urls(built + parsed)
