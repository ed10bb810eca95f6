import os
import unittest
from unittest.mock import patch

from configobj import ConfigObjError, ConfigObj
from hamcrest import assert_that, is_, equal_to, calling, raises

from officeurl.config.config import config_filename, config_flavor, load_config_file_base, load_config, \
    map_os_name, fetch_conf_path, office_urls_from_config, default_directory
from officeurl.url import InvalidDescriptorError

path = os.path.dirname(__file__)


def no_user_config(file):
    """ expanduser replacement so a user's own configuration does not leak into the tests """
    return file.replace('~', os.path.join(path, 'no-such-home'))


@patch('os.path.expanduser', no_user_config)
class ConfigTestCase(unittest.TestCase):

    def test_config_file_not_found(self):
        assert_that(calling(load_config_file_base).with_args('blah'), raises(IOError))

    def test_config_file_optional(self):
        assert_that(load_config_file_base('blah', must_exist=False), is_(equal_to(ConfigObj())))

    def test_config_file_invalid_schema(self):
        assert_that(calling(load_config).with_args('config_test_invalid_schema', path),
                    raises(ConfigObjError, "the config file config_test_invalid_schema failed validation "
                                           "office.port_numbers"))

    def test_config_file_invalid_syntax(self):
        assert_that(calling(load_config_file_base).with_args(os.path.join(path, 'config_test_invalid_syntax.cfg')),
                    raises(ConfigObjError, "at .*config_test_invalid_syntax.cfg"))

    def test_missing_schema(self):
        assert_that(calling(load_config).with_args('no_such_config', path),
                    raises(ConfigObjError, "schema for config file no_such_config"))

    def test_can_retrieve_config_file(self):
        name = config_flavor('config_test', "default")
        file = config_filename(name, path)
        assert_that(os.path.exists(file), is_(True), "expected config path %s to exist" % file)

    def test_config_flavor(self):
        assert_that(config_flavor('office'), is_('office'))
        assert_that(config_flavor('office', 'schema'), is_('office.schema'))

    def test_config_filename_default_directory(self):
        assert_that(config_filename('office.schema'), is_(os.path.join(default_directory, 'office.schema.cfg')))

    def test_layered_config(self):
        conf = load_config('config_test', path)
        assert_that(conf['office']['host'], is_('localhost'))
        assert_that(conf['office']['port_numbers'], is_([2002, 2003]))
        assert_that(conf['office']['pipe_names'], is_(['office']))
        assert_that(conf['office']['urls'], is_([]))

    def test_map_os_name(self):
        assert_that(map_os_name('Windows'), is_('windows'))
        assert_that(map_os_name('Darwin'), is_('osx'))
        assert_that(map_os_name('darwin'), is_('osx'))
        assert_that(map_os_name('Linux'), is_('linux'))

    def test_non_existent_config_path(self):
        sut = ConfigObj()
        assert_that(fetch_conf_path(sut, 'abcd'), is_(None))
        assert_that(fetch_conf_path(sut, ['a', 'b']), is_(None))

    def test_config_path(self):
        sut = ConfigObj({'a': {'b': {'c': '1'}}})
        assert_that(fetch_conf_path(sut, 'a.b')['c'], is_('1'))
        assert_that(fetch_conf_path(sut, ['a', 'b'])['c'], is_('1'))


@patch('os.path.expanduser', no_user_config)
class OfficeUrlsFromConfigTest(unittest.TestCase):

    def test_shipped_defaults(self):
        urls = office_urls_from_config()
        assert_that([str(u) for u in urls],
                    is_(["socket,host=127.0.0.1,port=2002,tcpNoDelay=1;urp;StarOffice.ServiceManager"]))

    def test_ports_and_pipes(self):
        urls = office_urls_from_config('config_test', path)
        assert_that([u.key() for u in urls], is_(["localhost:2002", "localhost:2003", "pipe:office"]))

    def test_urls(self):
        urls = office_urls_from_config('config_test_urls', path)
        assert_that([str(u) for u in urls], is_([
            "socket,host=remote,port=8100;urp;StarOffice.ServiceManager",
            "pipe,name=my%20pipe;urp;StarOffice.ComponentContext"]))
        assert_that(urls[1].pipe_name, is_("my pipe"))

    def test_invalid_url(self):
        assert_that(calling(office_urls_from_config).with_args('config_test_invalid_url', path),
                    raises(InvalidDescriptorError, "unknown connection type"))

    def test_missing_section(self):
        assert_that(calling(office_urls_from_config).with_args('config_test', path, 'other'),
                    raises(ConfigObjError, "has no section other"))


if __name__ == '__main__':  # pragma no cover
    unittest.main()
